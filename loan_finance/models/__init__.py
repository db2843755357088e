"""Domain models for the loan finance calculators."""

from loan_finance.models.borrower import Borrower
from loan_finance.models.enums import LoanStatus, PaymentStatus
from loan_finance.models.loan import LoanRecord, Payment
from loan_finance.models.results import (
    AmortizationResult,
    BorrowerLoanStats,
    Page,
    PortfolioSummary,
    ScheduleEntry,
)

__all__ = [
    "AmortizationResult",
    "Borrower",
    "BorrowerLoanStats",
    "LoanRecord",
    "LoanStatus",
    "Page",
    "Payment",
    "PaymentStatus",
    "PortfolioSummary",
    "ScheduleEntry",
]
