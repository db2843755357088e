"""Derived, ephemeral results of calculations and aggregations."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Generic, Sequence, TypeVar

from loan_finance.models.enums import LoanStatus
from loan_finance.models.loan import LoanRecord

T = TypeVar("T")


@dataclass(frozen=True)
class AmortizationResult:
    """Per-loan payment figures."""

    monthly_payment: Decimal
    processing_fee: Decimal
    disbursed_amount: Decimal
    total_interest: Decimal
    term_months: int

    @property
    def total_repayment(self) -> Decimal:
        return self.monthly_payment * self.term_months


@dataclass(frozen=True)
class PortfolioSummary:
    """Admin dashboard statistics over a loan collection."""

    total_borrowers: int
    active_loan_count: int
    monthly_volume: Decimal
    repayment_rate: Decimal  # Percentage, one decimal place
    status_counts: dict[LoanStatus, int]
    monthly_approved_volume: tuple[Decimal, ...]  # Jan..Dec, all years pooled

    @property
    def pending_count(self) -> int:
        return self.status_counts.get(LoanStatus.PENDING, 0)


@dataclass(frozen=True)
class BorrowerLoanStats:
    """Borrower dashboard figures over one borrower's loans."""

    total_borrowed: Decimal
    monthly_payment: Decimal
    outstanding_balance: Decimal
    next_payment: date | None
    active_loans: tuple[LoanRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScheduleEntry:
    """One installment of an amortization schedule."""

    number: int
    due_date: date
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal  # Remaining after this payment


@dataclass(frozen=True)
class Page(Generic[T]):
    """A window over an ordered sequence."""

    items: Sequence[T]
    page: int
    page_size: int
    total_pages: int
    total_items: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1 and self.total_pages > 0
