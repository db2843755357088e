"""JSON-ready conversion of records and calculation results."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def to_dict(obj: Any) -> dict:
    """Convert a record or result to a dictionary of JSON-safe values.

    Raises
    ------
    TypeError
        If ``obj`` is neither a dataclass instance nor a dict.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {str(serialize_value(k)): serialize_value(v) for k, v in obj.items()}
    raise TypeError(f"Cannot convert {type(obj).__name__} to a dict")


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a dataclass without the deep copy ``asdict`` makes.

    Nested dataclasses (a loan's borrower, a summary's loans) are
    converted recursively by ``serialize_value``.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, (datetime, date)):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {serialize_value(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
