"""Dashboard aggregations over loan collections."""

from loan_finance.aggregation.borrower import borrower_stats, is_active, upcoming_payment_loan
from loan_finance.aggregation.portfolio import monthly_approved_volume, pending_approvals, summarize

__all__ = [
    "borrower_stats",
    "is_active",
    "monthly_approved_volume",
    "pending_approvals",
    "summarize",
    "upcoming_payment_loan",
]
