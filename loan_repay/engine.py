"""Core calculation engine for the loan repayment calculator.

This module implements the financial formulas for annuity (equal payment)
and differentiated (equal principal portion) loans, together with the logic
that decides which quantity to derive from the inputs the user supplied.
Results are returned as ``CalculationResult`` objects; invalid inputs raise
``InvalidInput``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal, DecimalException, getcontext

from .config import DECIMAL_PRECISION, RATE_DIVISOR
from .data_models import (
    CalculationResult,
    Combination,
    LoanRequest,
    LoanType,
    PaymentSchedule,
    RepaymentPeriod,
)
from .errors import InvalidInput

getcontext().prec = DECIMAL_PRECISION

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _ceil(value: Decimal) -> Decimal:
    """Round up to the next whole currency unit."""
    return value.to_integral_value(rounding=ROUND_CEILING)


@dataclass(frozen=True)
class Loan:
    """A loan at a fixed annual nominal interest rate.

    ``interest`` is the annual rate in percent and must be positive. All
    methods are pure; a ``Loan`` can be shared between threads.
    """

    interest: Decimal

    def __post_init__(self) -> None:
        if self.interest is None or self.interest <= 0:
            raise InvalidInput(f"interest must be positive, got {self.interest}")

    @property
    def nominal_rate(self) -> Decimal:
        """Monthly interest rate as a fraction."""
        return self.interest / RATE_DIVISOR

    def _growth(self, months: int) -> Decimal:
        """Return ``(1 + i)^months``; it must exceed one and stay finite."""
        try:
            factor = (1 + self.nominal_rate) ** months
        except DecimalException as exc:
            raise InvalidInput(f"growth over {months} months is out of range") from exc
        if factor == 1:
            raise InvalidInput(f"interest {self.interest} is too small to accrue")
        return factor

    def differentiated_schedule(self, principal: Decimal, months: int) -> PaymentSchedule:
        """Return the monthly payments of a differentiated loan.

        Month ``m`` (0-based) pays ``principal / months`` plus interest on
        the balance still outstanding, ``principal - principal * m / months``.
        Each payment is rounded up to a whole unit.
        """
        if principal is None or months is None or principal <= 0 or months <= 0:
            raise InvalidInput("differentiated loan needs a positive principal and period")

        payments = []
        for m in range(months):
            # principal/n + rate * principal*(n-m)/n over a single division
            raw = principal * (RATE_DIVISOR + self.interest * (months - m)) / (months * RATE_DIVISOR)
            payments.append(_ceil(raw))

        overpayment = sum(payments, ZERO) - principal
        if overpayment <= 0:
            overpayment = ZERO
        logger.debug(
            "Differentiated schedule: principal=%s months=%d first=%s last=%s overpayment=%s",
            principal, months, payments[0], payments[-1], overpayment,
        )
        return PaymentSchedule(payments=payments, overpayment=overpayment)

    def annuity_payment(self, principal: Decimal, months: int) -> Decimal:
        """Return the fixed monthly payment, rounded up to a whole unit.

        The formula is:

            payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

        where ``P`` is the principal, ``i`` is the monthly rate and ``n``
        is the number of payments.
        """
        if months <= 0:
            raise InvalidInput("number of months must be positive")
        rate = self.nominal_rate
        factor = self._growth(months)
        return _ceil(principal * rate * factor / (factor - 1))

    def loan_principal(self, payment: Decimal, months: int) -> Decimal:
        """Return the principal that ``months`` payments of ``payment`` repay.

        No rounding is applied; the value is rounded only for display.
        """
        if months <= 0:
            raise InvalidInput("number of months must be positive")
        rate = self.nominal_rate
        factor = self._growth(months)
        return payment / (rate * factor / (factor - 1))

    def period(self, principal: Decimal, payment: Decimal) -> int:
        """Return the number of months needed to repay ``principal``.

        The result is rounded up to a whole month. A payment that does not
        exceed the first month's interest never repays the loan and is
        rejected.
        """
        if principal <= 0 or payment <= 0:
            raise InvalidInput("principal and payment must be positive")
        first_interest = principal * self.interest / RATE_DIVISOR
        if payment <= first_interest:
            raise InvalidInput(
                f"payment {payment} does not cover the first month's interest {first_interest}"
            )
        monthly_growth = (1 + self.nominal_rate).ln()
        if monthly_growth == 0:
            raise InvalidInput(f"interest {self.interest} is too small to accrue")
        months = (payment / (payment - first_interest)).ln() / monthly_growth
        return int(_ceil(months))


def _provided(value) -> bool:
    """A quantity counts as supplied when it is strictly positive."""
    return value is not None and value > 0


def _check_not_negative(request: LoanRequest) -> None:
    for name in ("principal", "payment", "months"):
        value = getattr(request, name)
        if value is not None and value < 0:
            raise InvalidInput(f"{name} must not be negative, got {value}")


def classify(request: LoanRequest) -> Combination:
    """Decide which annuity quantity to derive from the supplied ones.

    Combinations are tried in a fixed order: principal and months, then
    months and payment, then principal and payment. The first one whose
    quantities are all supplied wins.
    """
    if _provided(request.principal) and _provided(request.months):
        return Combination.KNOWN_PRINCIPAL_MONTHS
    if _provided(request.months) and _provided(request.payment):
        return Combination.KNOWN_MONTHS_PAYMENT
    if _provided(request.principal) and _provided(request.payment):
        return Combination.KNOWN_PRINCIPAL_PAYMENT
    raise InvalidInput("annuity loan needs two of principal, payment and periods")


def _non_negative(value: Decimal) -> Decimal:
    return value if value > 0 else ZERO


def _calculate_annuity(loan: Loan, request: LoanRequest) -> CalculationResult:
    combination = classify(request)
    logger.debug("Annuity combination: %s", combination.name)

    if combination is Combination.KNOWN_PRINCIPAL_MONTHS:
        principal, months = request.principal, request.months
        payment = loan.annuity_payment(principal, months)
    elif combination is Combination.KNOWN_MONTHS_PAYMENT:
        payment, months = request.payment, request.months
        principal = loan.loan_principal(payment, months)
    else:
        principal, payment = request.principal, request.payment
        months = loan.period(principal, payment)

    overpayment = _non_negative(payment * months - principal)
    logger.debug(
        "Annuity result: principal=%s payment=%s months=%d overpayment=%s",
        principal, payment, months, overpayment,
    )
    return CalculationResult(
        loan_type=LoanType.ANNUITY,
        principal=principal,
        months=months,
        overpayment=overpayment,
        payment=payment,
        combination=combination,
        period=RepaymentPeriod(months),
    )


def _calculate_differentiated(loan: Loan, request: LoanRequest) -> CalculationResult:
    schedule = loan.differentiated_schedule(request.principal, request.months)
    return CalculationResult(
        loan_type=LoanType.DIFFERENTIATED,
        principal=request.principal,
        months=request.months,
        overpayment=schedule.overpayment,
        schedule=schedule,
        period=RepaymentPeriod(request.months),
    )


def calculate(request: LoanRequest) -> CalculationResult:
    """Compute the missing quantity and overpayment for ``request``.

    Raises
    ------
    InvalidInput
        If the interest rate is not positive, a quantity is negative, or
        the supplied quantities do not determine a result.
    """
    try:
        loan = Loan(interest=request.interest)
        _check_not_negative(request)
        if request.loan_type is LoanType.DIFFERENTIATED:
            return _calculate_differentiated(loan, request)
        return _calculate_annuity(loan, request)
    except DecimalException as exc:
        logger.info("Rejected %s request: %s", request.loan_type.value, exc)
        raise InvalidInput(str(exc)) from exc
    except InvalidInput as exc:
        logger.info("Rejected %s request: %s", request.loan_type.value, exc.reason)
        raise
