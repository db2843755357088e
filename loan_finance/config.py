"""Configuration management for loan-finance."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from loan_finance.exceptions import ConfigurationError


@dataclass
class CalculatorConfig:
    """Policy constants used by the loan calculators."""

    processing_fee_rate: Decimal = Decimal("0.02")
    min_loan_amount: Decimal = Decimal("5000")
    max_loan_amount: Decimal = Decimal("5000000")
    term_options: tuple[int, ...] = (6, 12, 18, 24, 36)

    def __post_init__(self) -> None:
        if not self.processing_fee_rate.is_finite():
            raise ConfigurationError(
                f"processing_fee_rate must be a finite number, got {self.processing_fee_rate}"
            )
        if not Decimal("0") <= self.processing_fee_rate < Decimal("1"):
            raise ConfigurationError(
                f"processing_fee_rate must be in [0, 1), got {self.processing_fee_rate}"
            )
        if self.min_loan_amount > self.max_loan_amount:
            raise ConfigurationError(
                f"min_loan_amount {self.min_loan_amount} exceeds max_loan_amount {self.max_loan_amount}"
            )
        if not self.term_options or any(term <= 0 for term in self.term_options):
            raise ConfigurationError(f"term_options must be positive month counts, got {self.term_options}")


@dataclass
class DisplayConfig:
    """Formatting and table display configuration."""

    currency: str = "PHP"
    locale: str = "en-PH"
    date_locale: str = "en-US"
    rows_per_page: int = 5

    def __post_init__(self) -> None:
        if self.rows_per_page < 1:
            raise ConfigurationError(f"rows_per_page must be positive, got {self.rows_per_page}")


@dataclass
class LoanFinanceConfig:
    """Main configuration for loan-finance."""

    calculator: CalculatorConfig = field(default_factory=CalculatorConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = "INFO"

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a plain dict (for logging the effective settings)."""
        return {
            "processing_fee_rate": str(self.calculator.processing_fee_rate),
            "term_options": list(self.calculator.term_options),
            "currency": self.display.currency,
            "locale": self.display.locale,
            "date_locale": self.display.date_locale,
            "rows_per_page": self.display.rows_per_page,
            "log_level": self.log_level,
        }

    @classmethod
    def from_env(cls) -> "LoanFinanceConfig":
        """Create config from environment variables."""
        import os

        fee_rate = os.getenv("LOAN_FINANCE_PROCESSING_FEE_RATE", "0.02")
        try:
            processing_fee_rate = Decimal(fee_rate)
        except InvalidOperation as exc:
            raise ConfigurationError(
                f"LOAN_FINANCE_PROCESSING_FEE_RATE is not a number: {fee_rate!r}"
            ) from exc

        rows = os.getenv("LOAN_FINANCE_ROWS_PER_PAGE", "5")
        try:
            rows_per_page = int(rows)
        except ValueError as exc:
            raise ConfigurationError(
                f"LOAN_FINANCE_ROWS_PER_PAGE is not an integer: {rows!r}"
            ) from exc

        calculator = CalculatorConfig(processing_fee_rate=processing_fee_rate)

        display = DisplayConfig(
            currency=os.getenv("LOAN_FINANCE_CURRENCY", "PHP"),
            locale=os.getenv("LOAN_FINANCE_LOCALE", "en-PH"),
            date_locale=os.getenv("LOAN_FINANCE_DATE_LOCALE", "en-US"),
            rows_per_page=rows_per_page,
        )

        return cls(
            calculator=calculator,
            display=display,
            log_level=os.getenv("LOAN_FINANCE_LOG_LEVEL", "INFO"),
        )


DEFAULT_CONFIG = LoanFinanceConfig()
