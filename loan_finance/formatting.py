"""Locale-aware display strings for amounts, rates and dates.

Backed by Babel's CLDR data. Locale tags may use either BCP 47 hyphens
(``en-PH``) or POSIX underscores (``en_PH``). Currency and locale default
to the ``display`` section of the configuration.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from babel import Locale, UnknownLocaleError
from babel.dates import format_date as _babel_format_date
from babel.numbers import (
    UnknownCurrencyError,
    format_currency as _babel_format_currency,
    format_decimal,
    get_currency_symbol,
    validate_currency,
)

from loan_finance.config import DEFAULT_CONFIG, LoanFinanceConfig
from loan_finance.exceptions import InvalidInputError


def format_currency(
    amount: Decimal | int,
    currency_code: str | None = None,
    locale: str | None = None,
    *,
    config: LoanFinanceConfig | None = None,
) -> str:
    """Format an amount as currency with the currency's standard digits.

    ``format_currency(Decimal("1234.5"), "PHP", "en-PH")`` gives
    ``"₱1,234.50"``.

    Raises
    ------
    InvalidInputError
        If the locale or currency code is unknown.
    """
    display = (config or DEFAULT_CONFIG).display
    currency_code = currency_code or display.currency
    babel_locale = _parse_locale(locale or display.locale)
    _check_currency(currency_code)
    return _babel_format_currency(amount, currency_code, locale=babel_locale)


def format_plain_currency(
    amount: Decimal | int,
    currency_code: str | None = None,
    locale: str | None = None,
    *,
    whole: bool = False,
    config: LoanFinanceConfig | None = None,
) -> str:
    """Currency symbol followed by a plainly grouped number.

    Fraction digits are shown only when present (up to three), as in the
    lender tables; ``whole=True`` rounds half-up to whole units first, as
    in the calculator's monthly installment line.
    """
    display = (config or DEFAULT_CONFIG).display
    currency_code = currency_code or display.currency
    babel_locale = _parse_locale(locale or display.locale)
    _check_currency(currency_code)
    if whole:
        amount = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    symbol = get_currency_symbol(currency_code, locale=babel_locale)
    return f"{symbol}{format_decimal(amount, locale=babel_locale)}"


def format_amount(
    amount: Decimal | int,
    locale: str | None = None,
    *,
    config: LoanFinanceConfig | None = None,
) -> str:
    """Grouped number without a currency symbol."""
    locale = locale or (config or DEFAULT_CONFIG).display.locale
    return format_decimal(amount, locale=_parse_locale(locale))


def format_rate(
    rate: Decimal | int,
    locale: str | None = None,
    *,
    config: LoanFinanceConfig | None = None,
) -> str:
    """Interest rate as shown next to a loan, e.g. ``"12%"``."""
    locale = locale or (config or DEFAULT_CONFIG).display.locale
    return f"{format_decimal(rate, locale=_parse_locale(locale))}%"


def format_date(
    value: date | datetime,
    locale: str | None = None,
    *,
    config: LoanFinanceConfig | None = None,
) -> str:
    """Long date, e.g. ``"March 5, 2025"`` for en-US."""
    locale = locale or (config or DEFAULT_CONFIG).display.date_locale
    if isinstance(value, datetime):
        value = value.date()
    return _babel_format_date(value, format="long", locale=_parse_locale(locale))


def _parse_locale(locale: str) -> Locale:
    try:
        return Locale.parse(locale.replace("-", "_"))
    except (UnknownLocaleError, ValueError) as exc:
        raise InvalidInputError(f"Unknown locale: {locale!r}") from exc


def _check_currency(currency_code: str) -> None:
    try:
        validate_currency(currency_code)
    except UnknownCurrencyError as exc:
        raise InvalidInputError(f"Unknown currency: {currency_code!r}") from exc
