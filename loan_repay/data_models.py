"""Data models for the loan repayment calculator.

This module defines the loan type selector, the request assembled from the
user's inputs and the results produced by the engine. Using dataclasses
makes it easy to construct, inspect and serialize these structures.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from .config import ANNUITY, DIFF, MONTHS_PER_YEAR


class LoanType(str, Enum):
    """Repayment scheme selected with ``--type``."""

    ANNUITY = ANNUITY
    DIFFERENTIATED = DIFF


class Combination(Enum):
    """Which pair of quantities is known for an annuity loan.

    The third quantity of {principal, payment, months} is the one the
    engine derives.
    """

    KNOWN_PRINCIPAL_MONTHS = "payment"
    KNOWN_MONTHS_PAYMENT = "principal"
    KNOWN_PRINCIPAL_PAYMENT = "period"


@dataclass(frozen=True)
class LoanRequest:
    """The quantities supplied by the user.

    Attributes
    ----------
    loan_type: LoanType
        Annuity or differentiated repayment.
    interest: Decimal
        Annual nominal interest rate in percent (``12`` means 12 %).
    principal, payment: Optional[Decimal]
        Currency amounts; ``None`` when not provided.
    months: Optional[int]
        Number of monthly payments; ``None`` when not provided.
    """

    loan_type: LoanType
    interest: Decimal
    principal: Optional[Decimal] = None
    payment: Optional[Decimal] = None
    months: Optional[int] = None


@dataclass
class PaymentSchedule:
    """Per-month payments of a differentiated loan.

    ``payments[0]`` is the first month's payment. ``overpayment`` is the sum
    of all payments minus the principal, never below zero.
    """

    payments: List[Decimal]
    overpayment: Decimal

    def __len__(self) -> int:
        return len(self.payments)


@dataclass(frozen=True)
class RepaymentPeriod:
    """A number of months split into whole years and remaining months."""

    months: int

    @property
    def years(self) -> int:
        return self.months // MONTHS_PER_YEAR

    @property
    def remainder(self) -> int:
        return self.months % MONTHS_PER_YEAR


@dataclass
class CalculationResult:
    """Outcome of one calculation.

    For an annuity loan ``combination`` tells which of ``payment``,
    ``principal`` or ``months`` was derived; all three are filled in. For a
    differentiated loan ``schedule`` holds the monthly payments and
    ``payment`` is left empty.
    """

    loan_type: LoanType
    principal: Decimal
    months: int
    overpayment: Decimal
    payment: Optional[Decimal] = None
    combination: Optional[Combination] = None
    schedule: Optional[PaymentSchedule] = None
    period: Optional[RepaymentPeriod] = None
