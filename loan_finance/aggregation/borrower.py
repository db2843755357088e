"""Borrower dashboard figures."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from loan_finance.calculators.amortization import flat_monthly_installment
from loan_finance.models.enums import LoanStatus
from loan_finance.models.loan import LoanRecord
from loan_finance.models.results import BorrowerLoanStats

_ZERO = Decimal("0")


def is_active(loan: LoanRecord) -> bool:
    """An approved loan with money still owed."""
    return loan.status == LoanStatus.APPROVED and loan.outstanding_balance > 0


def borrower_stats(loans: Sequence[LoanRecord]) -> BorrowerLoanStats:
    """Totals shown on a borrower's dashboard.

    ``monthly_payment`` uses the flat installment on each loan's approved
    amount (zero until approval), summed across all loans. ``next_payment``
    is taken from the first active loan, in input order, that has one.
    """
    total_borrowed = _ZERO
    monthly_payment = _ZERO
    outstanding = _ZERO
    next_payment = None
    active: list[LoanRecord] = []

    for loan in loans:
        total_borrowed += loan.principal_amount
        monthly_payment += flat_monthly_installment(
            loan.approved_amount or _ZERO, loan.interest_rate, loan.term_months
        )
        outstanding += loan.outstanding_balance

        if is_active(loan):
            active.append(loan)
            if next_payment is None and loan.next_payment_date is not None:
                next_payment = loan.next_payment_date

    return BorrowerLoanStats(
        total_borrowed=total_borrowed,
        monthly_payment=monthly_payment,
        outstanding_balance=outstanding,
        next_payment=next_payment,
        active_loans=tuple(active),
    )


def upcoming_payment_loan(loans: Sequence[LoanRecord]) -> LoanRecord | None:
    """Active loan due soonest; loans without a due date sort last."""
    active = [loan for loan in loans if is_active(loan)]
    if not active:
        return None
    # min() returns the first of equal keys, so ties keep input order
    return min(active, key=lambda loan: loan.next_payment_date or date.max)
