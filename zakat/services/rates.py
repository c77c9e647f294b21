"""Exchange rate store.

Holds the rate table used for display-currency conversion together with when
it was last updated and where it came from. Refreshing asks an FX provider
for the latest table; if the provider fails, the built-in default table is
substituted so the calculator always has something to work with.
"""
import logging
import math
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Callable

from zakat.constants import RATES_STORE_KEY
from zakat.data.currencies import get_currency_codes, get_default_rates
from zakat.services.config import get_rates_max_age_hours
from zakat.services.fx import BASE_CURRENCY, get_rate, validate_rate_table
from zakat.services.providers import FXProvider, ProviderError
from zakat.services.providers.registry import get_fx_provider
from zakat.services.store import KeyValueStore, MemoryStore
from zakat.services.time_provider import get_now

logger = logging.getLogger('zakat.rates')

SOURCE_DEFAULT = 'default'
SOURCE_MANUAL = 'manual'


@dataclass
class RefreshResult:
    """Result of a refresh operation."""
    success: bool
    records_count: int
    source: str
    used_fallback: bool = False
    error_message: Optional[str] = None


def filter_supported_rates(fetched: dict[str, float]) -> dict[str, float]:
    """Reduce a fetched table to supported currencies.

    USD is pinned to 1. Supported codes missing from ``fetched`` (or carrying
    a non-positive rate) are filled from the default table.
    """
    defaults = get_default_rates()
    result = {}
    for code in get_currency_codes():
        if code == BASE_CURRENCY:
            result[code] = 1.0
            continue
        rate = fetched.get(code)
        if isinstance(rate, (int, float)) and math.isfinite(rate) and rate > 0:
            result[code] = float(rate)
        else:
            result[code] = defaults[code]
    return result


class RateStore:
    """Current exchange rate table plus refresh bookkeeping."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        provider_factory: Callable[[], FXProvider] = get_fx_provider,
    ):
        self._store = store if store is not None else MemoryStore()
        self._provider_factory = provider_factory
        self._lock = threading.Lock()
        self._rates = get_default_rates()
        self._last_updated: Optional[datetime] = None
        self._source = SOURCE_DEFAULT
        self._last_error: Optional[str] = None
        self._load()

    def _load(self) -> None:
        saved = self._store.load(RATES_STORE_KEY, None)
        if not isinstance(saved, dict) or not isinstance(saved.get('rates'), dict):
            return
        self._rates = filter_supported_rates(saved['rates'])
        self._source = saved.get('source') or SOURCE_DEFAULT
        try:
            self._last_updated = datetime.fromisoformat(saved['last_updated'])
        except (KeyError, TypeError, ValueError):
            self._last_updated = None
        logger.info(f"Loaded {len(self._rates)} saved rates (source={self._source})")

    def _save(self) -> None:
        self._store.save(RATES_STORE_KEY, {
            'rates': dict(self._rates),
            'last_updated': self._last_updated.isoformat() if self._last_updated else None,
            'source': self._source,
        })

    def _replace(self, rates: dict[str, float], source: str, error: Optional[str] = None) -> None:
        # A fallback table keeps the old timestamp so the next check retries
        with self._lock:
            self._rates = rates
            self._source = source
            if error is None:
                self._last_updated = get_now()
            self._last_error = error
            self._save()

    @property
    def rates(self) -> dict[str, float]:
        """Copy of the current table."""
        with self._lock:
            return dict(self._rates)

    @property
    def last_updated(self) -> Optional[datetime]:
        return self._last_updated

    @property
    def source(self) -> str:
        return self._source

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def get_rate(self, currency: str) -> float:
        """Multiplier for currency; 1.0 when unknown."""
        with self._lock:
            return get_rate(currency, self._rates)

    def is_stale(self, max_age_hours: Optional[float] = None) -> bool:
        """True when the table was never refreshed or is older than max age."""
        if self._last_updated is None:
            return True
        if max_age_hours is None:
            max_age_hours = get_rates_max_age_hours()
        return get_now() - self._last_updated > timedelta(hours=max_age_hours)

    def refresh(self, provider: Optional[FXProvider] = None) -> RefreshResult:
        """Fetch the latest rates, falling back to the default table on failure."""
        provider = provider or self._provider_factory()
        try:
            fetched = provider.get_rates()
            if not fetched:
                raise ProviderError("No rates returned from provider")
        except ProviderError as e:
            logger.warning(f"Rate refresh via {provider.name} failed, using defaults: {e}")
            defaults = get_default_rates()
            self._replace(defaults, SOURCE_DEFAULT, error=str(e))
            return RefreshResult(
                success=False,
                records_count=len(defaults),
                source=SOURCE_DEFAULT,
                used_fallback=True,
                error_message=str(e),
            )

        rates = filter_supported_rates({r.currency.upper(): r.rate_to_usd for r in fetched})
        self._replace(rates, provider.name)
        logger.info(f"Refreshed {len(rates)} rates from {provider.name}")
        return RefreshResult(success=True, records_count=len(rates), source=provider.name)

    def refresh_if_stale(self, max_age_hours: Optional[float] = None) -> Optional[RefreshResult]:
        """Refresh only when stale. Returns None if nothing was done."""
        if not self.is_stale(max_age_hours):
            return None
        return self.refresh()

    def set_manual_rates(self, rates) -> dict[str, float]:
        """Replace the table with user-entered rates.

        Codes the user left out keep their current value.

        Raises:
            InvalidRateTableError: If any entry is invalid.
        """
        cleaned = validate_rate_table(rates)
        merged = self.rates
        merged.update(cleaned)
        self._replace(merged, SOURCE_MANUAL)
        logger.info(f"Manual rates saved for {len(cleaned)} currencies")
        return dict(merged)

    def reset(self) -> None:
        """Drop back to the built-in default table and forget the refresh time."""
        with self._lock:
            self._rates = get_default_rates()
            self._source = SOURCE_DEFAULT
            self._last_updated = None
            self._last_error = None
            self._store.delete(RATES_STORE_KEY)

    def to_dict(self) -> dict:
        """Status payload for the API and CLI."""
        with self._lock:
            rates = dict(self._rates)
        return {
            'base_currency': BASE_CURRENCY,
            'rates': rates,
            'last_updated': self._last_updated.isoformat() if self._last_updated else None,
            'source': self._source,
            'stale': self.is_stale(),
            'last_error': self._last_error,
        }
