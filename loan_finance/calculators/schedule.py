"""Payment schedule and loan period helpers."""

from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

from dateutil.relativedelta import relativedelta

from loan_finance.calculators.amortization import compute_amortization
from loan_finance.models.results import ScheduleEntry

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


def generate_schedule(
    principal: Decimal | int,
    annual_rate_percent: Decimal | int,
    term_months: int,
    first_payment_date: date,
) -> list[ScheduleEntry]:
    """Build the annuity installment schedule for a loan.

    Parameters
    ----------
    principal : Decimal | int
        Amount being repaid.
    annual_rate_percent : Decimal | int
        Annual interest rate as a percentage.
    term_months : int
        Number of monthly installments.
    first_payment_date : date
        Due date of installment 1; later installments fall on the same day
        of subsequent months, clamped to the month's last day.

    Returns
    -------
    list[ScheduleEntry]
        Installments in order. Amounts are rounded to cents and the last
        installment absorbs the rounding drift, so the closing balance is
        exactly zero.
    """
    result = compute_amortization(principal, annual_rate_percent, term_months)
    entries = list(
        _iter_entries(
            Decimal(principal),
            Decimal(annual_rate_percent) / 100 / 12,
            term_months,
            result.monthly_payment.quantize(_CENT, rounding=ROUND_HALF_UP),
            first_payment_date,
        )
    )
    logger.debug(
        "Generated %d-entry schedule from %s",
        len(entries),
        first_payment_date,
        extra={"term_months": term_months},
    )
    return entries


def _iter_entries(
    principal: Decimal,
    monthly_rate: Decimal,
    term_months: int,
    payment: Decimal,
    first_payment_date: date,
) -> Iterator[ScheduleEntry]:
    balance = principal
    for number in range(1, term_months + 1):
        interest = (balance * monthly_rate).quantize(_CENT, rounding=ROUND_HALF_UP)
        if number == term_months:
            principal_part = balance
        else:
            principal_part = min(payment - interest, balance)
        balance -= principal_part

        yield ScheduleEntry(
            number=number,
            due_date=first_payment_date + relativedelta(months=number - 1),
            payment=principal_part + interest,
            principal=principal_part,
            interest=interest,
            balance=balance,
        )


def first_payment_date_for(start_date: date) -> date:
    """First installment falls due one calendar month after the start."""
    return start_date + relativedelta(months=1)


def loan_end_date(start_date: date, term_months: int) -> date:
    """Date the loan period ends, ``term_months`` after ``start_date``."""
    return start_date + relativedelta(months=term_months)


def schedule_filename(loan_id: int, on: date) -> str:
    """Download name for an exported payment schedule."""
    return f"loan-{loan_id}-payment-schedule-{on.isoformat()}.pdf"
