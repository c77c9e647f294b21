"""Provider registry and selection logic."""
from zakat.services.config import is_sync_enabled
from . import FXProvider
from .fx_providers import ExchangeRateAPIProvider, StaticFXProvider


def get_fx_provider() -> FXProvider:
    """Get the FX provider allowed by configuration.

    Priority:
    1. ExchangeRateAPI (if network access is allowed)
    2. Static default table
    """
    if is_sync_enabled():
        return ExchangeRateAPIProvider()
    return StaticFXProvider()


def get_provider_status() -> dict:
    """Return status of the configured provider."""
    fx = get_fx_provider()
    return {
        'fx': {
            'provider': fx.name,
            'requires_network': fx.requires_network,
        },
    }
