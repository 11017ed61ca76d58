"""Utility functions for the loan repayment calculator.

This module provides helpers for parsing user input into Python data types
and for rounding amounts for display.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from .data_models import LoanType
from .errors import InvalidInput


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and handles both integer and float-like
    strings. It raises ``ValueError`` if conversion fails or the value is
    not a finite number.
    """
    try:
        cleaned = value.strip().replace(",", "")
        result = Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def parse_amount(value: Optional[str]) -> Optional[Decimal]:
    """Parse a currency amount with optional suffixes.

    Accepts plain numbers ("500000") and shorthand with ``k``/``m`` suffixes
    (e.g., "500k" meaning 500_000). Blank input yields ``None``.
    """
    if value is None or not value.strip():
        return None
    value = value.strip().lower()
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    return decimal_from_str(value) * factor


def parse_periods(value: Optional[str]) -> Optional[int]:
    """Parse a whole number of months. Blank input yields ``None``."""
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid number of periods: {value}") from exc


def parse_loan_type(value: Optional[str]) -> LoanType:
    """Map the ``--type`` value to a ``LoanType``.

    Anything other than ``annuity`` or ``diff`` is an ``InvalidInput``.
    """
    try:
        return LoanType((value or "").strip())
    except ValueError as exc:
        raise InvalidInput(f"unknown loan type {value!r}") from exc


def round_display(value: Decimal) -> int:
    """Round an amount to the nearest whole unit for printing."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
