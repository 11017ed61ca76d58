"""Command‑line interface for the loan repayment calculator.

This module uses the ``click`` library to implement the ``loan-repay``
command. Given any two of principal, monthly payment and number of months
(plus the interest rate) it derives the third for an annuity loan, or lists
the monthly payments of a differentiated loan. Results are printed as text
or as JSON.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click

from .config import INCORRECT_PARAMETERS, LOG_FORMAT, log_level_from_env
from .data_models import LoanRequest
from .engine import calculate
from .errors import InvalidInput
from .formatter import print_result, result_to_dict
from .utils import decimal_from_str, parse_amount, parse_loan_type, parse_periods


def _parse_option(parser, value: Optional[str], name: str):
    try:
        return parser(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint=f"'--{name}'")


def build_request_from_options(
    principal: Optional[str],
    payment: Optional[str],
    periods: Optional[str],
    interest: Optional[str],
    loan_type: Optional[str],
) -> LoanRequest:
    """Turn raw option strings into a ``LoanRequest``.

    Values that are not numbers at all raise ``click.BadParameter``. A
    missing or unknown loan type raises ``InvalidInput``; a missing interest
    rate is left as ``None`` and rejected by the engine.
    """
    principal_value = _parse_option(parse_amount, principal, "principal")
    payment_value = _parse_option(parse_amount, payment, "payment")
    periods_value = _parse_option(parse_periods, periods, "periods")
    interest_value = None
    if interest is not None and interest.strip():
        interest_value = _parse_option(decimal_from_str, interest.rstrip("%"), "interest")
    return LoanRequest(
        loan_type=parse_loan_type(loan_type),
        interest=interest_value,
        principal=principal_value,
        payment=payment_value,
        months=periods_value,
    )


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; stdout carries only the result."""
    level = logging.DEBUG if verbose else log_level_from_env()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)


@click.group()
def cli() -> None:
    """A command‑line calculator for annuity and differentiated loans."""
    pass


@cli.command("calculate")
@click.option("--type", "loan_type", help="Loan type: 'annuity' or 'diff'")
@click.option("--principal", "-p", "principal", help="Loan principal (e.g. 500000 or 500k)")
@click.option("--payment", "-a", "payment", help="Monthly payment")
@click.option("--periods", "-n", "periods", help="Number of monthly payments")
@click.option("--interest", "-i", "interest", help="Annual interest rate (percent)")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details to stderr")
def calculate_command(
    loan_type: Optional[str],
    principal: Optional[str],
    payment: Optional[str],
    periods: Optional[str],
    interest: Optional[str],
    as_json: bool,
    verbose: bool,
) -> None:
    """Derive the missing loan quantity and the overpayment.

    For an annuity loan supply two of --principal, --payment and --periods:

        loan-repay calculate --type=annuity --principal=1000000 --periods=60 --interest=10

    For a differentiated loan supply --principal and --periods.
    """
    configure_logging(verbose)
    try:
        request = build_request_from_options(principal, payment, periods, interest, loan_type)
        result = calculate(request)
    except InvalidInput:
        click.echo(INCORRECT_PARAMETERS)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result_to_dict(result), indent=2))
    else:
        print_result(result)


if __name__ == "__main__":
    cli()
