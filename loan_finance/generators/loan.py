"""Sample borrowers and loans for demos and tests."""

from __future__ import annotations

import dataclasses
import logging
from datetime import timedelta
from decimal import Decimal

from loan_finance.config import DEFAULT_CONFIG, LoanFinanceConfig
from loan_finance.generators.base import BaseGenerator
from loan_finance.models.borrower import Borrower
from loan_finance.models.enums import LoanStatus
from loan_finance.models.loan import LoanRecord

logger = logging.getLogger(__name__)


class LoanRecordGenerator(BaseGenerator):
    """Generate synthetic borrowers and loan records."""

    STATUS_WEIGHTS = {
        LoanStatus.PENDING: 0.20,
        LoanStatus.APPROVED: 0.40,
        LoanStatus.ACTIVE: 0.10,
        LoanStatus.REJECTED: 0.10,
        LoanStatus.COMPLETED: 0.15,
        LoanStatus.DEFAULTED: 0.05,
    }

    RATE_OPTIONS = [Decimal("5"), Decimal("8.5"), Decimal("12"), Decimal("15"), Decimal("18")]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_PH",
        config: LoanFinanceConfig | None = None,
    ) -> None:
        super().__init__(seed=seed, locale=locale)
        self.term_options = list((config or DEFAULT_CONFIG).calculator.term_options)

    def generate_borrower(self, borrower_id: int) -> Borrower:
        """Generate a borrower.

        Parameters
        ----------
        borrower_id : int
            Id to assign.

        Returns
        -------
        Borrower
            Generated borrower.
        """
        return Borrower(
            id=borrower_id,
            first_name=self.fake.first_name(),
            last_name=self.fake.last_name(),
            email=self.fake.email(),
            phone=self.fake.phone_number(),
            city=self.fake.city(),
            postal_code=self.fake.postcode(),
            created_at=self.fake.date_time_between(start_date="-3y", end_date="-1y"),
        )

    def generate(
        self,
        loan_id: int,
        borrower: Borrower | None = None,
        status: LoanStatus | None = None,
    ) -> LoanRecord:
        """Generate a loan record.

        Parameters
        ----------
        loan_id : int
            Id to assign.
        borrower : Borrower | None
            Resolved borrower; ``None`` leaves the loan unjoined.
        status : LoanStatus | None
            Fixed status, or weighted random when ``None``.

        Returns
        -------
        LoanRecord
            Generated loan with amounts consistent with its status.
        """
        if status is None:
            status = self.rng.choices(
                list(self.STATUS_WEIGHTS), weights=list(self.STATUS_WEIGHTS.values()), k=1
            )[0]

        principal = Decimal(self.rng.randint(5, 500) * 1000)

        if status in (LoanStatus.PENDING, LoanStatus.REJECTED):
            approved = None
            outstanding = Decimal("0")
        else:
            # Lenders sometimes fund less than requested
            approved = principal if self.rng.random() < 0.7 else principal * Decimal("0.8")
            if status == LoanStatus.COMPLETED or self.rng.random() < 0.25:
                outstanding = Decimal("0")
            else:
                outstanding = (approved * Decimal(self.rng.randint(5, 100)) / 100).quantize(
                    Decimal("0.01")
                )

        created_at = self.fake.date_time_between(start_date="-2y", end_date="now")
        next_payment = None
        if status == LoanStatus.APPROVED and outstanding > 0:
            next_payment = (created_at + timedelta(days=self.rng.randint(30, 60))).date()

        return LoanRecord(
            id=loan_id,
            principal_amount=principal,
            approved_amount=approved,
            interest_rate=self.rng.choice(self.RATE_OPTIONS),
            term_months=self.rng.choice(self.term_options),
            outstanding_balance=outstanding,
            status=status,
            created_at=created_at,
            user_id=borrower.id if borrower is not None else None,
            borrower=borrower,
            loan_number=f"LN-{loan_id:06d}",
            loan_type=self.rng.choice(["personal", "business", "salary"]),
            next_payment_date=next_payment,
        )

    def generate_portfolio(
        self,
        num_borrowers: int,
        max_loans_per_borrower: int = 3,
        unresolved_rate: float = 0.0,
    ) -> tuple[list[Borrower], list[LoanRecord]]:
        """Generate borrowers with their loans.

        Parameters
        ----------
        num_borrowers : int
            Number of borrowers to generate.
        max_loans_per_borrower : int
            Each borrower gets between 1 and this many loans.
        unresolved_rate : float
            Share of loans emitted without their borrower joined.

        Returns
        -------
        tuple[list[Borrower], list[LoanRecord]]
            Borrowers and loans (loan ids are sequential from 1).
        """
        borrowers = [self.generate_borrower(i) for i in range(1, num_borrowers + 1)]
        loans: list[LoanRecord] = []
        for borrower in borrowers:
            for _ in range(self.rng.randint(1, max_loans_per_borrower)):
                loan = self.generate(len(loans) + 1, borrower=borrower)
                if self.rng.random() < unresolved_rate:
                    # Keep user_id so attach_borrowers can still resolve it
                    loan = dataclasses.replace(loan, borrower=None)
                loans.append(loan)

        logger.info(
            "Generated %d borrowers with %d loans",
            len(borrowers),
            len(loans),
            extra={"borrower_count": len(borrowers), "loan_count": len(loans)},
        )
        return borrowers, loans
