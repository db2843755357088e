"""Enumeration types for lending-platform records."""

from enum import Enum


class LoanStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    ACTIVE = "active"
    REJECTED = "rejected"
    COMPLETED = "completed"
    DEFAULTED = "defaulted"

    @property
    def label(self) -> str:
        """Display label shown in status badges."""
        return self.value.capitalize()


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    LATE = "late"
    MISSED = "missed"
