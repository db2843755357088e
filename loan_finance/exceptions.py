"""Custom exception hierarchy for loan-finance."""


class LoanFinanceError(Exception):
    """Base exception for all loan-finance errors."""


class InvalidInputError(LoanFinanceError, ValueError):
    """Raised when a calculation receives values it cannot produce figures for."""


class RecordParseError(InvalidInputError):
    """Raised when a raw API payload cannot be normalized into a record."""


class ConfigurationError(LoanFinanceError):
    """Raised when configuration is invalid or missing."""
