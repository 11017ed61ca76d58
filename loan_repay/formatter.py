"""Output helpers for the loan repayment calculator.

This module renders a ``CalculationResult`` as the text lines shown on the
terminal and converts it into a JSON-serialisable dictionary. All amounts
are rounded to whole currency units at this point only.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .data_models import CalculationResult, Combination, LoanType, RepaymentPeriod
from .utils import round_display


def period_message(period: RepaymentPeriod) -> str:
    """Describe how long repayment takes in years and months."""
    if period.years > 0 and period.remainder > 0:
        return (
            f"It will take {period.years} years and {period.remainder} months "
            "to repay this loan!"
        )
    if period.years > 0:
        return f"It will take {period.years} years to repay this loan!"
    return f"It will take {period.remainder} months to repay this loan!"


def result_lines(result: CalculationResult) -> List[str]:
    """Return the lines to print for ``result``, in order."""
    lines: List[str] = []
    if result.loan_type is LoanType.DIFFERENTIATED:
        for month, payment in enumerate(result.schedule.payments, start=1):
            lines.append(f"Month {month}: payment is {round_display(payment)}")
    elif result.combination is Combination.KNOWN_PRINCIPAL_MONTHS:
        lines.append(f"Your annuity payment = {round_display(result.payment)}!")
    elif result.combination is Combination.KNOWN_MONTHS_PAYMENT:
        lines.append(f"Your loan principal = {round_display(result.principal)}!")
    else:
        lines.append(period_message(result.period))

    if result.overpayment > 0:
        lines.append(f"Overpayment = {round_display(result.overpayment)}")
    return lines


def print_result(result: CalculationResult) -> None:
    """Print ``result`` in a human-readable format."""
    for line in result_lines(result):
        print(line)


def result_to_dict(result: CalculationResult) -> Dict[str, Any]:
    """Convert ``result`` into a dictionary suitable for ``json.dump``."""
    data: Dict[str, Any] = {
        "type": result.loan_type.value,
        "principal": round_display(result.principal),
        "months": result.months,
        "years": result.period.years,
        "remaining_months": result.period.remainder,
        "overpayment": round_display(result.overpayment),
    }
    if result.loan_type is LoanType.DIFFERENTIATED:
        data["payments"] = [
            {"month": month, "payment": round_display(payment)}
            for month, payment in enumerate(result.schedule.payments, start=1)
        ]
    else:
        data["payment"] = round_display(result.payment)
        data["computed"] = result.combination.value
    return data
