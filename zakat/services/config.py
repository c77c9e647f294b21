"""Configuration service for rate refresh and calculation defaults."""
import os


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def is_sync_enabled() -> bool:
    """Check if network fetches of exchange rates are allowed.

    Controlled by RATES_ALLOW_NETWORK env var (default: 1/true).
    """
    return _env_flag('RATES_ALLOW_NETWORK', '1')


def is_background_sync_enabled() -> bool:
    """Check if the app factory should start the rate refresh thread.

    Controlled by RATES_BACKGROUND_SYNC env var (default: 0/false).
    Only effective if network sync is also enabled.
    """
    if not is_sync_enabled():
        return False
    return _env_flag('RATES_BACKGROUND_SYNC', '0')


def get_user_agent() -> str:
    """Get the User-Agent string for provider HTTP requests."""
    default_ua = 'ZakatCalculator/1.0 (https://github.com/zakat-app)'
    return os.environ.get('RATES_USER_AGENT', default_ua)


def get_refresh_interval_seconds() -> int:
    """Get the background refresh wake interval in seconds.

    Controlled by RATES_REFRESH_INTERVAL_SECONDS env var (default: 3600).
    """
    return int(os.environ.get('RATES_REFRESH_INTERVAL_SECONDS', '3600'))


def get_rates_max_age_hours() -> float:
    """Get the age after which the rate table counts as stale.

    Controlled by RATES_MAX_AGE_HOURS env var (default: 24).
    """
    return _env_float('RATES_MAX_AGE_HOURS', 24.0)


def get_default_nisab_standard() -> str:
    """Get the default Nisab standard ("gold" or "silver").

    Controlled by NISAB_DEFAULT_STANDARD env var (default: gold).
    Unknown values fall back to gold.
    """
    value = os.environ.get('NISAB_DEFAULT_STANDARD', 'gold').lower()
    return value if value in ('gold', 'silver') else 'gold'


def get_default_display_currency() -> str:
    """Get the default display currency code."""
    return os.environ.get('DEFAULT_DISPLAY_CURRENCY', 'USD').upper()


def get_default_gold_price() -> float:
    """Gold price per gram (USD) used when a request omits it."""
    return _env_float('DEFAULT_GOLD_PRICE_PER_GRAM', 65.0)


def get_default_silver_price() -> float:
    """Silver price per gram (USD) used when a request omits it."""
    return _env_float('DEFAULT_SILVER_PRICE_PER_GRAM', 0.85)


def get_calculation_defaults() -> dict:
    """Get defaults applied to incomplete calculation requests."""
    return {
        'nisab_standard': get_default_nisab_standard(),
        'display_currency': get_default_display_currency(),
        'gold_price_per_gram': get_default_gold_price(),
        'silver_price_per_gram': get_default_silver_price(),
    }
