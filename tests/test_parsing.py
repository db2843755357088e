"""Tests for API payload normalization."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from loan_finance.exceptions import InvalidInputError, RecordParseError
from loan_finance.models import Borrower, LoanStatus, PaymentStatus
from loan_finance.parsing import (
    attach_borrowers,
    extract_collection,
    parse_borrower,
    parse_loan_record,
    parse_loans,
    parse_payment,
    to_decimal,
)


class TestToDecimal:
    """Tests for to_decimal."""

    def test_numeric_string(self) -> None:
        assert to_decimal("12.50") == Decimal("12.50")

    def test_grouped_string(self) -> None:
        assert to_decimal(" 1,250.00 ") == Decimal("1250.00")

    def test_int(self) -> None:
        assert to_decimal(30000) == Decimal("30000")

    def test_float_goes_through_str(self) -> None:
        assert to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", ["abc", "", True, None, [1], "NaN", "Infinity"])
    def test_rejects(self, value) -> None:
        with pytest.raises(RecordParseError):
            to_decimal(value)


class TestParseLoanRecord:
    """Tests for parse_loan_record."""

    def test_string_numbers(self, raw_loan: dict) -> None:
        loan = parse_loan_record(raw_loan)

        assert loan.id == 101
        assert loan.principal_amount == Decimal("50000.00")
        assert loan.approved_amount == Decimal("45000.00")
        assert loan.interest_rate == Decimal("12.00")
        assert loan.term_months == 12
        assert loan.outstanding_balance == Decimal("30000.00")
        assert loan.status == LoanStatus.APPROVED
        assert loan.created_at == datetime(2025, 2, 14, 8, 30, tzinfo=timezone.utc)
        assert loan.user_id == 7
        assert loan.loan_number == "LN-000101"
        assert loan.loan_type == "personal"
        assert loan.next_payment_date == date(2025, 4, 1)
        assert loan.borrower is None
        assert loan.borrower_id is None

    def test_json_numbers(self, raw_loan: dict) -> None:
        raw_loan.update(principal_amount=50000, interest_rate=12, term_months="24", id="101")

        loan = parse_loan_record(raw_loan)

        assert loan.principal_amount == Decimal("50000")
        assert loan.term_months == 24
        assert loan.id == 101

    def test_pending_without_approval(self, raw_loan: dict) -> None:
        raw_loan.update(status="pending", approved_amount=None)
        del raw_loan["outstanding_balance"]

        loan = parse_loan_record(raw_loan)

        assert loan.approved_amount is None
        assert loan.outstanding_balance == 0

    def test_status_case_insensitive(self, raw_loan: dict) -> None:
        raw_loan["status"] = "Approved"

        assert parse_loan_record(raw_loan).status == LoanStatus.APPROVED

    def test_nested_borrower(self, raw_loan: dict) -> None:
        raw_loan["borrower"] = {"id": 7, "first_name": "Maria", "last_name": "Santos", "email": "m@x.ph"}

        loan = parse_loan_record(raw_loan)

        assert loan.borrower is not None
        assert loan.borrower_id == 7
        assert loan.borrower.full_name == "Maria Santos"

    @pytest.mark.parametrize("field", ["principal_amount", "interest_rate", "term_months", "status", "created_at"])
    def test_missing_required_field(self, raw_loan: dict, field: str) -> None:
        del raw_loan[field]

        with pytest.raises(RecordParseError, match=field):
            parse_loan_record(raw_loan)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("principal_amount", "0"),
            ("principal_amount", "-5"),
            ("term_months", 0),
            ("term_months", "12.5"),
            ("interest_rate", "-1"),
            ("outstanding_balance", "-0.01"),
            ("approved_amount", "-10"),
            ("status", "archived"),
            ("created_at", "yesterday"),
        ],
    )
    def test_invalid_values(self, raw_loan: dict, field: str, value) -> None:
        raw_loan[field] = value

        with pytest.raises(RecordParseError):
            parse_loan_record(raw_loan)

    def test_parse_error_is_invalid_input(self, raw_loan: dict) -> None:
        raw_loan["principal_amount"] = "lots"

        with pytest.raises(InvalidInputError, match="Loan 101"):
            parse_loan_record(raw_loan)


class TestParseLoans:
    """Tests for parse_loans and attach_borrowers."""

    def test_attaches_borrowers_from_users(self, raw_loan: dict, borrower: Borrower) -> None:
        loans = parse_loans([raw_loan], users=[borrower])

        assert loans[0].borrower == borrower

    def test_unknown_user_left_unresolved(self, raw_loan: dict, other_borrower: Borrower, caplog) -> None:
        loans = parse_loans([raw_loan], users=[other_borrower])

        assert loans[0].borrower is None
        assert (caplog.records[0].loan_id, caplog.records[0].user_id) == (101, 7)

    def test_existing_borrower_kept(self, make_loan, borrower: Borrower, other_borrower: Borrower) -> None:
        loan = make_loan(1)
        replacement = Borrower(id=borrower.id, first_name="X", last_name="Y", email="x@y.ph")

        result = attach_borrowers([loan], [replacement, other_borrower])

        assert result[0].borrower == borrower

    def test_attach_does_not_mutate(self, make_loan, borrower: Borrower) -> None:
        loan = make_loan(1, resolved=False)

        result = attach_borrowers([loan], [borrower])

        assert loan.borrower is None
        assert result[0].borrower == borrower

    def test_invalid_raises_by_default(self, raw_loan: dict) -> None:
        bad = dict(raw_loan, id=102, term_months=None)

        with pytest.raises(RecordParseError):
            parse_loans([raw_loan, bad])

    def test_skip_invalid(self, raw_loan: dict, caplog) -> None:
        bad = dict(raw_loan, id=102, term_months=None)

        loans = parse_loans([raw_loan, bad], skip_invalid=True)

        assert [loan.id for loan in loans] == [101]
        assert "Skipping malformed loan" in caplog.text
        assert [r.loan_id for r in caplog.records] == [102]


class TestParseBorrower:
    """Tests for parse_borrower."""

    def test_fields(self) -> None:
        user = parse_borrower(
            {
                "id": "3",
                "first_name": "Ana",
                "last_name": "Cruz",
                "email": "ana@example.ph",
                "phone": "+63 917 000 0000",
                "postalCode": "1000",
                "created_at": "2024-05-01T00:00:00Z",
            }
        )

        assert user.id == 3
        assert user.postal_code == "1000"
        assert user.created_at == datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert user.city is None

    def test_optional_fields_become_strings(self) -> None:
        user = parse_borrower(
            {"id": 4, "first_name": "Ben", "phone": 639170000000, "city": "", "postal_code": 1200}
        )

        assert user.phone == "639170000000"
        assert user.postal_code == "1200"
        assert user.city is None

    def test_missing_id(self) -> None:
        with pytest.raises(RecordParseError):
            parse_borrower({"first_name": "Ana"})


class TestParsePayment:
    """Tests for parse_payment."""

    def test_fields(self) -> None:
        payment = parse_payment(
            {
                "id": 9,
                "amount": "4200.00",
                "due_date": "2025-05-01",
                "paid_date": "2025-04-28T10:00:00Z",
                "status": "paid",
                "payment_number": 3,
                "loan": {"id": 101, "loan_number": "LN-000101"},
            }
        )

        assert payment.amount == Decimal("4200.00")
        assert payment.due_date == date(2025, 5, 1)
        assert payment.paid_date == date(2025, 4, 28)
        assert payment.status == PaymentStatus.PAID
        assert payment.loan_id == 101
        assert payment.loan_number == "LN-000101"

    def test_without_loan(self) -> None:
        payment = parse_payment(
            {"id": 9, "amount": 100, "due_date": "2025-05-01", "status": "pending", "payment_number": 1}
        )

        assert payment.paid_date is None
        assert payment.loan_id is None

    def test_unknown_status(self) -> None:
        with pytest.raises(RecordParseError):
            parse_payment(
                {"id": 9, "amount": 100, "due_date": "2025-05-01", "status": "bounced", "payment_number": 1}
            )


class TestExtractCollection:
    """Tests for extract_collection."""

    def test_keyed(self) -> None:
        assert extract_collection({"loans": [1], "data": [2]}, "loans") == [1]

    def test_data_envelope(self) -> None:
        assert extract_collection({"data": [2]}, "loans") == [2]

    def test_bare_list(self) -> None:
        assert extract_collection([3], "loans") == [3]

    def test_unexpected_shape(self) -> None:
        assert extract_collection({"loans": "nope"}, "loans") == []
        assert extract_collection(None, "loans") == []
