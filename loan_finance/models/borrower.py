"""Borrower model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Borrower:
    """Borrower (platform user) as resolved from the users collection."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    city: str | None = None
    postal_code: str | None = None
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
