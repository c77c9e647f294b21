"""FX rate provider implementations."""
import http.client
import json
import logging
import urllib.request
import urllib.error

from zakat.data.currencies import get_default_rates
from zakat.services.config import get_user_agent
from . import FXProvider, FXRate, ProviderError, RateLimitError, NetworkError

logger = logging.getLogger('zakat.providers')


class ExchangeRateAPIProvider(FXProvider):
    """exchangerate-api.com v4 provider - free, no API key.

    Provides latest USD-based rates for all major currencies.
    """

    BASE_URL = "https://api.exchangerate-api.com/v4"

    def __init__(self, timeout: int = 30):
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "exchangerate-api"

    @property
    def requires_network(self) -> bool:
        return True

    def get_rates(self) -> list[FXRate]:
        """Fetch latest FX rates. No retries: failures surface as ProviderError."""
        url = f"{self.BASE_URL}/latest/USD"

        try:
            req = urllib.request.Request(url, headers={'User-Agent': get_user_agent()})
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                data = json.loads(response.read().decode('utf-8'))
        except urllib.error.HTTPError as e:
            if e.code == 429:
                raise RateLimitError("Rate limit exceeded")
            raise ProviderError(f"HTTP error: {e.code}")
        except urllib.error.URLError as e:
            raise NetworkError(f"Network error: {e.reason}")
        except (http.client.HTTPException, OSError) as e:
            raise NetworkError(f"Network error: {e}")
        except (UnicodeDecodeError, ValueError):
            raise ProviderError("Invalid JSON response")

        rates_blob = data.get('rates') if isinstance(data, dict) else None
        if not isinstance(rates_blob, dict):
            raise ProviderError("Unexpected response format")

        rates = []
        for currency, rate in rates_blob.items():
            try:
                rate_value = float(rate)
            except (TypeError, ValueError):
                logger.debug(f"Skipping non-numeric rate for {currency}: {rate!r}")
                continue
            rates.append(FXRate(
                currency=str(currency).upper(),
                rate_to_usd=rate_value,
                source=self.name
            ))

        if not any(r.currency == 'USD' for r in rates):
            rates.append(FXRate(currency='USD', rate_to_usd=1.0, source=self.name))

        return rates


class StaticFXProvider(FXProvider):
    """Offline provider serving the built-in default table."""

    @property
    def name(self) -> str:
        return "default"

    @property
    def requires_network(self) -> bool:
        return False

    def get_rates(self) -> list[FXRate]:
        return [
            FXRate(currency=code, rate_to_usd=rate, source=self.name)
            for code, rate in get_default_rates().items()
        ]
