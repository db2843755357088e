"""Loan and payment records as delivered by the lending API."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from loan_finance.models.borrower import Borrower
from loan_finance.models.enums import LoanStatus, PaymentStatus


@dataclass(frozen=True)
class LoanRecord:
    """Loan application/contract, read-only input to the calculators.

    Amounts are already parsed to ``Decimal``; ``interest_rate`` is an
    annual percentage (``12`` means 12% a year).
    """

    id: int
    principal_amount: Decimal
    approved_amount: Decimal | None  # None until approval
    interest_rate: Decimal
    term_months: int
    outstanding_balance: Decimal
    status: LoanStatus
    created_at: datetime
    updated_at: datetime | None = None
    user_id: int | None = None  # Join key into the users collection
    borrower: Borrower | None = None
    loan_number: str | None = None
    loan_type: str | None = None
    next_payment_date: date | None = None
    start_date: date | None = None

    @property
    def borrower_id(self) -> int | None:
        """Id of the resolved borrower, or None when the join failed."""
        return self.borrower.id if self.borrower is not None else None


@dataclass(frozen=True)
class Payment:
    """Scheduled or settled loan payment."""

    id: int
    amount: Decimal
    due_date: date
    status: PaymentStatus
    payment_number: int
    paid_date: date | None = None
    loan_id: int | None = None
    loan_number: str | None = None
