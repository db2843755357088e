"""Normalization of raw lending-API payloads into typed records.

The API sends numbers as JSON numbers or strings depending on the
endpoint, and nests borrower objects only sometimes. Everything is
converted here so the calculators only ever see ``Decimal``, ``int``,
``datetime`` and enum values.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Sequence

from dateutil.parser import isoparse

from loan_finance.exceptions import RecordParseError
from loan_finance.models.borrower import Borrower
from loan_finance.models.enums import LoanStatus, PaymentStatus
from loan_finance.models.loan import LoanRecord, Payment

logger = logging.getLogger(__name__)


def extract_collection(payload: Any, key: str) -> list[Any]:
    """Pull a list out of an API envelope.

    Accepts ``{key: [...]}``, ``{"data": [...]}`` or a bare list, in that
    order of preference. Anything else yields an empty list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for candidate in (payload.get(key), payload.get("data")):
            if isinstance(candidate, list):
                return candidate
    return []


def parse_borrower(raw: Mapping[str, Any]) -> Borrower:
    """Parse a user object into a ``Borrower``."""
    return Borrower(
        id=_int(raw, "id"),
        first_name=str(raw.get("first_name") or ""),
        last_name=str(raw.get("last_name") or ""),
        email=str(raw.get("email") or ""),
        phone=_optional_str(raw, "phone"),
        city=_optional_str(raw, "city"),
        postal_code=_optional_str(raw, "postal_code") or _optional_str(raw, "postalCode"),
        created_at=_optional_datetime(raw, "created_at"),
    )


def parse_loan_record(raw: Mapping[str, Any]) -> LoanRecord:
    """Parse one loan object into a ``LoanRecord``.

    Raises
    ------
    RecordParseError
        If a required field is missing or malformed, or a value is out of
        range (non-positive principal or term, negative amounts).
    """
    loan_id = _int(raw, "id")
    borrower_raw = raw.get("borrower")
    try:
        record = LoanRecord(
            id=loan_id,
            principal_amount=_decimal(raw, "principal_amount"),
            approved_amount=_optional_decimal(raw, "approved_amount"),
            interest_rate=_decimal(raw, "interest_rate"),
            term_months=_int(raw, "term_months"),
            # Pending applications come without a balance
            outstanding_balance=_optional_decimal(raw, "outstanding_balance") or Decimal("0"),
            status=_enum(LoanStatus, raw, "status"),
            created_at=_datetime(raw, "created_at"),
            updated_at=_optional_datetime(raw, "updated_at"),
            user_id=_optional_int(raw, "user_id"),
            borrower=parse_borrower(borrower_raw) if isinstance(borrower_raw, Mapping) else None,
            loan_number=_optional_str(raw, "loan_number"),
            loan_type=_optional_str(raw, "type"),
            next_payment_date=_optional_date(raw, "next_payment_date"),
            start_date=_optional_date(raw, "start_date"),
        )
    except RecordParseError as exc:
        raise RecordParseError(f"Loan {loan_id}: {exc}") from exc

    _check_ranges(record)
    return record


def parse_loans(
    raw_loans: Iterable[Mapping[str, Any]],
    users: Sequence[Borrower] | None = None,
    *,
    skip_invalid: bool = False,
) -> list[LoanRecord]:
    """Parse a loan collection, optionally resolving borrowers from ``users``.

    Parameters
    ----------
    raw_loans : Iterable[Mapping[str, Any]]
        Loan objects from the API.
    users : Sequence[Borrower] | None
        Users collection used to fill in missing ``borrower`` objects.
    skip_invalid : bool
        Log and drop malformed loans instead of raising.
    """
    loans: list[LoanRecord] = []
    for raw in raw_loans:
        try:
            loans.append(parse_loan_record(raw))
        except RecordParseError as exc:
            if not skip_invalid:
                raise
            logger.warning("Skipping malformed loan: %s", exc, extra={"loan_id": raw.get("id")})

    if users is not None:
        loans = attach_borrowers(loans, users)
    return loans


def attach_borrowers(loans: Sequence[LoanRecord], users: Sequence[Borrower]) -> list[LoanRecord]:
    """Fill in ``borrower`` from ``users`` by ``user_id`` where it is missing."""
    by_id = {user.id: user for user in users}
    result = []
    for loan in loans:
        if loan.borrower is None and loan.user_id is not None:
            borrower = by_id.get(loan.user_id)
            if borrower is None:
                logger.warning(
                    "Loan %s references unknown user %s",
                    loan.id,
                    loan.user_id,
                    extra={"loan_id": loan.id, "user_id": loan.user_id},
                )
            else:
                loan = dataclasses.replace(loan, borrower=borrower)
        result.append(loan)
    return result


def parse_payment(raw: Mapping[str, Any]) -> Payment:
    """Parse a payment object into a ``Payment``."""
    loan_raw = raw.get("loan")
    loan_raw = loan_raw if isinstance(loan_raw, Mapping) else {}
    return Payment(
        id=_int(raw, "id"),
        amount=_decimal(raw, "amount"),
        due_date=_date(raw, "due_date"),
        status=_enum(PaymentStatus, raw, "status"),
        payment_number=_int(raw, "payment_number"),
        paid_date=_optional_date(raw, "paid_date"),
        loan_id=_optional_int(loan_raw, "id"),
        loan_number=_optional_str(loan_raw, "loan_number"),
    )


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON number or numeric string (``"1,250.00"``) to ``Decimal``."""
    if isinstance(value, bool):
        raise RecordParseError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.replace(",", "").strip())
        except InvalidOperation as exc:
            raise RecordParseError(f"Not a number: {value!r}") from exc
    else:
        raise RecordParseError(f"Expected a number, got {type(value).__name__}")

    if not result.is_finite():
        raise RecordParseError(f"Not a finite number: {value!r}")
    return result


def _check_ranges(record: LoanRecord) -> None:
    if record.principal_amount <= 0:
        raise RecordParseError(f"Loan {record.id}: principal_amount must be positive")
    if record.term_months <= 0:
        raise RecordParseError(f"Loan {record.id}: term_months must be positive")
    if record.interest_rate < 0:
        raise RecordParseError(f"Loan {record.id}: interest_rate must not be negative")
    if record.approved_amount is not None and record.approved_amount < 0:
        raise RecordParseError(f"Loan {record.id}: approved_amount must not be negative")
    if record.outstanding_balance < 0:
        raise RecordParseError(f"Loan {record.id}: outstanding_balance must not be negative")


def _require(raw: Mapping[str, Any], key: str) -> Any:
    value = raw.get(key)
    if value is None or value == "":
        raise RecordParseError(f"Missing field {key!r}")
    return value


def _optional_str(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _decimal(raw: Mapping[str, Any], key: str) -> Decimal:
    value = _require(raw, key)
    try:
        return to_decimal(value)
    except RecordParseError as exc:
        raise RecordParseError(f"Field {key!r}: {exc}") from exc


def _optional_decimal(raw: Mapping[str, Any], key: str) -> Decimal | None:
    if raw.get(key) in (None, ""):
        return None
    return _decimal(raw, key)


def _int(raw: Mapping[str, Any], key: str) -> int:
    value = _require(raw, key)
    if isinstance(value, bool):
        raise RecordParseError(f"Field {key!r}: expected an integer, got {value!r}")
    try:
        number = to_decimal(value)
    except RecordParseError as exc:
        raise RecordParseError(f"Field {key!r}: {exc}") from exc
    if number != number.to_integral_value():
        raise RecordParseError(f"Field {key!r}: expected an integer, got {value!r}")
    return int(number)


def _optional_int(raw: Mapping[str, Any], key: str) -> int | None:
    if raw.get(key) in (None, ""):
        return None
    return _int(raw, key)


def _datetime(raw: Mapping[str, Any], key: str) -> datetime:
    value = _require(raw, key)
    if isinstance(value, datetime):
        return value
    try:
        return isoparse(str(value))
    except ValueError as exc:
        raise RecordParseError(f"Field {key!r}: not an ISO timestamp: {value!r}") from exc


def _optional_datetime(raw: Mapping[str, Any], key: str) -> datetime | None:
    if raw.get(key) in (None, ""):
        return None
    return _datetime(raw, key)


def _date(raw: Mapping[str, Any], key: str) -> date:
    value = _require(raw, key)
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return _datetime(raw, key).date()


def _optional_date(raw: Mapping[str, Any], key: str) -> date | None:
    if raw.get(key) in (None, ""):
        return None
    return _date(raw, key)


def _enum(enum_cls: type, raw: Mapping[str, Any], key: str) -> Any:
    value = str(_require(raw, key)).strip().lower()
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise RecordParseError(f"Field {key!r}: unknown {enum_cls.__name__} {value!r}") from exc
