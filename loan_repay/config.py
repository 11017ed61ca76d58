"""Configuration constants for the loan repayment calculator.

Numeric constants used by the formulas, the flat error message shown to
users and the settings that can be overridden from the environment (log
level and the web server address).
"""

import logging
import os

# ── Formulas ─────────────────────────────────────────────────────────
MONTHS_PER_YEAR = 12
RATE_DIVISOR = 1200        # annual percent -> monthly fraction
DECIMAL_PRECISION = 28

# ── Loan types accepted on the command line ──────────────────────────
ANNUITY = "annuity"
DIFF = "diff"

# ── Messages ─────────────────────────────────────────────────────────
INCORRECT_PARAMETERS = "Incorrect parameters"

# ── Logging ──────────────────────────────────────────────────────────
LOG_LEVEL_ENV = "LOAN_REPAY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ── Web front end ────────────────────────────────────────────────────
WEB_HOST = os.environ.get("LOAN_REPAY_HOST", "0.0.0.0")
WEB_PORT = int(os.environ.get("LOAN_REPAY_PORT", "8710"))


def log_level_from_env() -> str:
    """Return the log level name configured in the environment.

    Unknown level names fall back to ``DEFAULT_LOG_LEVEL``.
    """
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name
