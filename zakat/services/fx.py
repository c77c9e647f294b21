"""Currency conversion service.

Rate tables map a currency code to "1 USD = X units of this currency", so
converting an amount quoted in USD into a display currency is a single
multiplication. Lookups never fail: anything missing or unusable counts as 1.
"""
import math
from typing import Mapping

from zakat.data.currencies import get_currency_info, is_valid_currency
from zakat.services.models import to_amount, to_rate

BASE_CURRENCY = 'USD'


class InvalidRateTableError(ValueError):
    """Raised when a manually entered rate table is rejected."""

    def __init__(self, invalid_codes: list[str]):
        self.invalid_codes = invalid_codes
        super().__init__(f"Invalid exchange rates for: {', '.join(invalid_codes)}")


def get_rate(currency: str, fx_rates: Mapping | None) -> float:
    """Return the multiplier for ``currency``, or 1.0 if absent or invalid."""
    if not fx_rates or not isinstance(currency, str):
        return 1.0
    return to_rate(fx_rates.get(currency.upper()))


def convert(amount_in_base: float, currency: str, fx_rates: Mapping | None) -> float:
    """Convert an amount quoted in the base currency into ``currency``."""
    return to_amount(amount_in_base) * get_rate(currency, fx_rates)


def validate_rate_table(fx_rates) -> dict[str, float]:
    """Validate a manually entered rate table.

    Every entry other than USD must be a supported currency with a positive,
    finite rate. USD is always forced to 1.

    Returns:
        Cleaned table with upper-cased codes and float rates.

    Raises:
        InvalidRateTableError: listing every offending code.
    """
    if not isinstance(fx_rates, Mapping):
        raise InvalidRateTableError(['<table>'])

    cleaned = {}
    invalid = []
    for code, rate in fx_rates.items():
        code_str = str(code).upper()
        if code_str == BASE_CURRENCY:
            continue
        if not is_valid_currency(code_str):
            invalid.append(code_str)
            continue
        try:
            value = float(rate)
        except (TypeError, ValueError):
            invalid.append(code_str)
            continue
        if isinstance(rate, bool) or not math.isfinite(value) or value <= 0:
            invalid.append(code_str)
            continue
        cleaned[code_str] = value

    if invalid:
        raise InvalidRateTableError(sorted(invalid))

    cleaned[BASE_CURRENCY] = 1.0
    return cleaned


def format_amount(amount: float, currency: str) -> str:
    """Format an amount for display, e.g. ``$1,234.50``.

    Unrecognized codes fall back to ``"XYZ 1,234.50"``.
    """
    value = amount if isinstance(amount, (int, float)) and math.isfinite(amount) else 0.0
    code = currency.upper() if isinstance(currency, str) else ''
    info = get_currency_info(code)
    if info is None:
        return f"{code} {value:,.2f}".strip()

    sign = '-' if value < 0 else ''
    return f"{sign}{info['symbol']}{abs(value):,.{info['minor_unit']}f}"
