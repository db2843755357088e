"""Loan payment calculators."""

from loan_finance.calculators.amortization import (
    clamp_loan_amount,
    compute_amortization,
    compute_flat_estimate,
    flat_monthly_installment,
)
from loan_finance.calculators.schedule import (
    first_payment_date_for,
    generate_schedule,
    loan_end_date,
    schedule_filename,
)

__all__ = [
    "clamp_loan_amount",
    "compute_amortization",
    "compute_flat_estimate",
    "first_payment_date_for",
    "flat_monthly_installment",
    "generate_schedule",
    "loan_end_date",
    "schedule_filename",
]
