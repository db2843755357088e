"""Admin dashboard statistics over a loan collection."""

from __future__ import annotations

import logging
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from loan_finance.models.enums import LoanStatus
from loan_finance.models.loan import LoanRecord
from loan_finance.models.results import PortfolioSummary

logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal("0.1")
_ZERO = Decimal("0")


def summarize(loans: Sequence[LoanRecord]) -> PortfolioSummary:
    """Compute portfolio statistics.

    Only loans whose borrower has been resolved count towards the
    statistics; the rest still belong in raw listings but are skipped here.

    Parameters
    ----------
    loans : Sequence[LoanRecord]
        Loans in any order.

    Returns
    -------
    PortfolioSummary
        Borrower count, active loans, approved volume, repayment rate,
        status tally and month buckets.
    """
    resolved = [loan for loan in loans if loan.borrower is not None]
    if len(resolved) < len(loans):
        skipped = len(loans) - len(resolved)
        logger.debug("Skipping %d loans without borrower info", skipped, extra={"skipped_count": skipped})

    approved = [loan for loan in resolved if loan.status == LoanStatus.APPROVED]
    repaid = [loan for loan in approved if loan.outstanding_balance == 0]

    monthly_volume = sum((loan.approved_amount or _ZERO for loan in approved), _ZERO)

    return PortfolioSummary(
        total_borrowers=len({loan.borrower_id for loan in resolved}),
        active_loan_count=sum(1 for loan in approved if loan.outstanding_balance > 0),
        monthly_volume=monthly_volume,
        repayment_rate=_percentage(len(repaid), len(resolved)),
        status_counts=dict(Counter(loan.status for loan in resolved)),
        monthly_approved_volume=monthly_approved_volume(approved),
    )


def monthly_approved_volume(loans: Sequence[LoanRecord]) -> tuple[Decimal, ...]:
    """Sum approved amounts into twelve calendar-month slots.

    Slot 0 is January. The year of ``created_at`` is ignored, so loans from
    different years share a slot.
    """
    months = [_ZERO] * 12
    for loan in loans:
        if loan.status != LoanStatus.APPROVED:
            continue
        months[loan.created_at.month - 1] += loan.approved_amount or _ZERO
    return tuple(months)


def pending_approvals(loans: Sequence[LoanRecord], search: str = "") -> list[LoanRecord]:
    """Review queue: resolved pending loans whose id contains ``search``."""
    return [
        loan
        for loan in loans
        if loan.borrower is not None
        and loan.status == LoanStatus.PENDING
        and search in str(loan.id)
    ]


def _percentage(part: int, whole: int) -> Decimal:
    if whole == 0:
        return _ZERO
    return (Decimal(part) / Decimal(whole) * 100).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
