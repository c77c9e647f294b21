"""Pluggable exchange rate provider interface."""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class FXRate:
    """FX rate data point."""
    currency: str       # ISO 4217 code
    rate_to_usd: float  # 1 USD = X currency
    source: str


class FXProvider(ABC):
    """Abstract base for FX rate providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier."""
        pass

    @property
    @abstractmethod
    def requires_network(self) -> bool:
        """Whether fetching needs outbound HTTP."""
        pass

    @abstractmethod
    def get_rates(self) -> list[FXRate]:
        """Fetch the latest USD-based FX rates.

        Returns:
            List of FXRate objects

        Raises:
            ProviderError: If fetch fails
        """
        pass


class ProviderError(Exception):
    """Base exception for provider errors."""
    pass


class RateLimitError(ProviderError):
    """API rate limit exceeded."""
    pass


class NetworkError(ProviderError):
    """Network connectivity issue."""
    pass
