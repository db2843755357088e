"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from loan_finance.models import Borrower, LoanRecord, LoanStatus


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def borrower() -> Borrower:
    """Sample borrower."""
    return Borrower(id=7, first_name="Maria", last_name="Santos", email="maria@example.com")


@pytest.fixture
def other_borrower() -> Borrower:
    """Second sample borrower."""
    return Borrower(id=8, first_name="Jose", last_name="Reyes", email="jose@example.com")


@pytest.fixture
def make_loan(borrower: Borrower):
    """Factory for loan records with sensible defaults."""

    def _make(
        loan_id: int = 1,
        status: LoanStatus = LoanStatus.APPROVED,
        principal: str = "30000",
        approved: str | None = "30000",
        rate: str = "12",
        term: int = 12,
        outstanding: str = "10000",
        created_at: datetime = datetime(2025, 3, 10, 9, 0),
        resolved: bool = True,
        owner: Borrower | None = None,
        next_payment_date: date | None = None,
    ) -> LoanRecord:
        joined = (owner or borrower) if resolved else None
        return LoanRecord(
            id=loan_id,
            principal_amount=Decimal(principal),
            approved_amount=Decimal(approved) if approved is not None else None,
            interest_rate=Decimal(rate),
            term_months=term,
            outstanding_balance=Decimal(outstanding),
            status=status,
            created_at=created_at,
            user_id=(owner or borrower).id,
            borrower=joined,
            next_payment_date=next_payment_date,
        )

    return _make


@pytest.fixture
def raw_loan() -> dict:
    """Loan object as the lending API returns it."""
    return {
        "id": 101,
        "loan_number": "LN-000101",
        "type": "personal",
        "principal_amount": "50000.00",
        "approved_amount": "45000.00",
        "interest_rate": "12.00",
        "term_months": 12,
        "outstanding_balance": "30000.00",
        "status": "approved",
        "created_at": "2025-02-14T08:30:00.000000Z",
        "updated_at": "2025-02-20T10:00:00.000000Z",
        "user_id": 7,
        "next_payment_date": "2025-04-01",
    }
