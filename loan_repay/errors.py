"""Errors raised by the loan repayment calculator."""

from .config import INCORRECT_PARAMETERS


class InvalidInput(ValueError):
    """The supplied loan parameters cannot produce a result.

    Every rejection carries the same flat message; ``reason`` keeps the
    specific cause for logging only.
    """

    def __init__(self, reason: str = "") -> None:
        super().__init__(INCORRECT_PARAMETERS)
        self.reason = reason
