import json
from decimal import Decimal

import click
import pytest
from click.testing import CliRunner

from loan_repay.config import log_level_from_env
from loan_repay.data_models import LoanType
from loan_repay.errors import InvalidInput
from loan_repay.main import build_request_from_options, cli


def run(*args):
    return CliRunner().invoke(cli, ["calculate", *args])


def test_annuity_payment_command():
    result = run("--type=annuity", "--principal=1000000", "--periods=60", "--interest=10")
    assert result.exit_code == 0
    assert result.output.splitlines() == ["Your annuity payment = 21248!", "Overpayment = 274880"]


def test_differentiated_command_with_suffix():
    result = run("--type=diff", "--principal=500k", "--periods=8", "--interest=7.8")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Month 1: payment is 65750",
        "Month 2: payment is 65344",
        "Month 3: payment is 64938",
        "Month 4: payment is 64532",
        "Month 5: payment is 64125",
        "Month 6: payment is 63719",
        "Month 7: payment is 63313",
        "Month 8: payment is 62907",
        "Overpayment = 14628",
    ]


def test_period_command():
    result = run("--type=annuity", "--principal=500000", "--payment=23000", "--interest=7.8")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "It will take 2 years to repay this loan!",
        "Overpayment = 52000",
    ]


def test_principal_command():
    result = run("--type=annuity", "--payment=8722", "--periods=120", "--interest=5.6")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].startswith("Your loan principal = 8000")
    assert lines[1].startswith("Overpayment = 2466")


@pytest.mark.parametrize(
    "args",
    [
        ("--type=annuity", "--principal=1000000", "--periods=60"),
        ("--principal=1000000", "--periods=60", "--interest=10"),
        ("--type=fixed", "--principal=1000000", "--periods=60", "--interest=10"),
        ("--type=annuity", "--principal=1000000", "--periods=60", "--interest=0"),
        ("--type=diff", "--payment=1000", "--periods=60", "--interest=10"),
        ("--type=diff", "--principal=-1000000", "--periods=60", "--interest=10"),
        ("--type=annuity", "--principal=1000000", "--interest=10"),
        ("--type=annuity", "--principal=500000", "--payment=3000", "--interest=7.8"),
    ],
)
def test_incorrect_parameters(args):
    result = run(*args)
    assert result.exit_code == 1
    assert result.output == "Incorrect parameters\n"


def test_non_numeric_value_is_a_usage_error():
    result = run("--type=annuity", "--principal=lots", "--periods=60", "--interest=10")
    assert result.exit_code == 2


def test_json_output():
    result = run("--type=annuity", "--principal=1000000", "--periods=60", "--interest=10", "--json")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["payment"] == 21248
    assert data["computed"] == "payment"
    assert data["overpayment"] == 274880


def test_build_request_from_options():
    request = build_request_from_options("1.5m", None, "", "7.8%", "diff")
    assert request.loan_type is LoanType.DIFFERENTIATED
    assert request.principal == Decimal("1500000")
    assert request.payment is None
    assert request.months is None
    assert request.interest == Decimal("7.8")


def test_build_request_rejects_bad_values():
    with pytest.raises(click.BadParameter):
        build_request_from_options("1000", None, "twelve", "10", "annuity")
    with pytest.raises(InvalidInput):
        build_request_from_options("1000", None, "12", "10", None)


@pytest.mark.parametrize(
    "args",
    [
        ("--type=annuity", "--principal=1000", "--periods=12", "--interest=1e-30"),
        ("--type=annuity", "--principal=1000", "--payment=100", "--interest=1e-30"),
        ("--type=annuity", "--payment=100", "--periods=12", "--interest=1e-30"),
        ("--type=annuity", "--principal=1000", "--periods=1000000000", "--interest=10"),
    ],
)
def test_out_of_range_numbers_print_incorrect_parameters(args):
    result = run(*args)
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert result.exit_code == 1
    assert result.output == "Incorrect parameters\n"


def test_unknown_log_level_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("LOAN_REPAY_LOG_LEVEL", "BOGUS")
    assert log_level_from_env() == "WARNING"
    result = run("--type=annuity", "--principal=1000000", "--periods=60", "--interest=10")
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "Your annuity payment = 21248!"


def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv("LOAN_REPAY_LOG_LEVEL", "debug")
    assert log_level_from_env() == "DEBUG"
