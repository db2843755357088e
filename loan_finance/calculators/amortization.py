"""Loan payment calculators.

Two payment formulas coexist on the lending platform and are kept apart:

- ``compute_amortization``: fixed-payment annuity (compounding monthly),
  used by the public loan calculator.
- ``compute_flat_estimate``: flat add-on interest spread evenly over the
  term, used for borrower-facing quick quotes and dashboard totals.

They intentionally yield different figures for the same inputs.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from loan_finance.config import DEFAULT_CONFIG, LoanFinanceConfig
from loan_finance.exceptions import InvalidInputError
from loan_finance.models.results import AmortizationResult

logger = logging.getLogger(__name__)

_WHOLE_UNIT = Decimal("1")
_MONTHS_PER_YEAR = 12
_PERCENT = 100


def compute_amortization(
    principal: Decimal | int,
    annual_rate_percent: Decimal | int,
    term_months: int,
    *,
    config: LoanFinanceConfig | None = None,
) -> AmortizationResult:
    """Compute annuity payment figures for a loan.

    Parameters
    ----------
    principal : Decimal | int
        Requested amount, before fees. Must be positive.
    annual_rate_percent : Decimal | int
        Annual interest rate as a percentage (``12`` for 12%).
    term_months : int
        Loan duration in months. Must be positive.
    config : LoanFinanceConfig | None
        Supplies the processing fee rate. Defaults to ``DEFAULT_CONFIG``.

    Returns
    -------
    AmortizationResult
        Monthly payment at full precision, whole-unit processing fee,
        disbursed amount and total interest.

    Raises
    ------
    InvalidInputError
        If principal or term is not positive, or the rate is negative.
    """
    principal, rate = _validate(principal, annual_rate_percent, term_months)

    monthly_rate = rate / _PERCENT / _MONTHS_PER_YEAR
    if monthly_rate == 0:
        monthly_payment = principal / term_months
    else:
        growth = (1 + monthly_rate) ** term_months
        monthly_payment = principal * (monthly_rate * growth) / (growth - 1)

    logger.debug(
        "Annuity payment for %s at %s%% over %d months: %s",
        principal,
        rate,
        term_months,
        monthly_payment,
    )
    return _build_result(principal, monthly_payment, term_months, config or DEFAULT_CONFIG)


def compute_flat_estimate(
    principal: Decimal | int,
    annual_rate_percent: Decimal | int,
    term_months: int,
    *,
    config: LoanFinanceConfig | None = None,
) -> AmortizationResult:
    """Compute a flat-rate quick quote.

    The monthly payment is ``(principal + principal * rate / 100) / term``:
    one year's interest added once, regardless of the term, and no
    compounding. Validation and fee rules match ``compute_amortization``.
    """
    principal, rate = _validate(principal, annual_rate_percent, term_months)

    monthly_payment = (principal + principal * rate / _PERCENT) / term_months
    return _build_result(principal, monthly_payment, term_months, config or DEFAULT_CONFIG)


def flat_monthly_installment(
    amount: Decimal | int,
    annual_rate_percent: Decimal | int,
    term_months: int,
) -> Decimal:
    """Per-loan monthly installment shown on the borrower dashboard.

    ``amount / term + amount * rate / 100 / term``. Unlike the quotes, a
    zero amount is accepted so unfunded loans contribute nothing.
    """
    amount = _as_decimal(amount, "amount")
    rate = _as_decimal(annual_rate_percent, "annual_rate_percent")
    _check_term(term_months)
    if amount < 0:
        raise InvalidInputError(f"amount must not be negative, got {amount}")
    if rate < 0:
        raise InvalidInputError(f"annual_rate_percent must not be negative, got {rate}")

    return amount / term_months + amount * rate / _PERCENT / term_months


def clamp_loan_amount(
    amount: Decimal | int,
    *,
    config: LoanFinanceConfig | None = None,
) -> Decimal:
    """Clamp a calculator amount to the configured loan bounds."""
    calc = (config or DEFAULT_CONFIG).calculator
    amount = _as_decimal(amount, "amount")
    return max(calc.min_loan_amount, min(amount, calc.max_loan_amount))


def _build_result(
    principal: Decimal,
    monthly_payment: Decimal,
    term_months: int,
    config: LoanFinanceConfig,
) -> AmortizationResult:
    processing_fee = (principal * config.calculator.processing_fee_rate).quantize(
        _WHOLE_UNIT, rounding=ROUND_HALF_UP
    )
    return AmortizationResult(
        monthly_payment=monthly_payment,
        processing_fee=processing_fee,
        disbursed_amount=principal - processing_fee,
        total_interest=monthly_payment * term_months - principal,
        term_months=term_months,
    )


def _validate(
    principal: Decimal | int,
    annual_rate_percent: Decimal | int,
    term_months: int,
) -> tuple[Decimal, Decimal]:
    principal = _as_decimal(principal, "principal")
    rate = _as_decimal(annual_rate_percent, "annual_rate_percent")
    _check_term(term_months)

    if principal <= 0:
        raise InvalidInputError(f"principal must be positive, got {principal}")
    if rate < 0:
        raise InvalidInputError(f"annual_rate_percent must not be negative, got {rate}")
    return principal, rate


def _check_term(term_months: int) -> None:
    if isinstance(term_months, bool) or not isinstance(term_months, int):
        raise InvalidInputError(f"term_months must be an integer, got {term_months!r}")
    if term_months <= 0:
        raise InvalidInputError(f"term_months must be positive, got {term_months}")


def _as_decimal(value: Decimal | int, name: str) -> Decimal:
    # Strings and floats are normalized by loan_finance.parsing, not here
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise InvalidInputError(f"{name} must be a Decimal or int, got {type(value).__name__}")
    if isinstance(value, Decimal) and not value.is_finite():
        raise InvalidInputError(f"{name} must be finite, got {value}")
    return Decimal(value)
