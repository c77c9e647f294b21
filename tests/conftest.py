"""Pytest fixtures for Zakat Calculator tests."""
import pytest
from datetime import datetime, timezone

from zakat import create_app
from zakat.services.providers import ProviderError
from zakat.services.rates import RateStore
from zakat.services.store import MemoryStore
from zakat.services.time_provider import TimeProvider
from tests.fakes.fake_fx import FakeFXProvider


# Fixed "now" for deterministic tests
FROZEN_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep tests independent of the developer's environment."""
    for name in (
        'RATES_ALLOW_NETWORK',
        'RATES_BACKGROUND_SYNC',
        'RATES_REFRESH_INTERVAL_SECONDS',
        'RATES_MAX_AGE_HOURS',
        'NISAB_DEFAULT_STANDARD',
        'DEFAULT_DISPLAY_CURRENCY',
        'DEFAULT_GOLD_PRICE_PER_GRAM',
        'DEFAULT_SILVER_PRICE_PER_GRAM',
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app():
    """Create application for testing.

    Yields:
        Flask application configured for testing.
    """
    app = create_app({'TESTING': True})
    yield app


@pytest.fixture
def client(app):
    """Create test client.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making requests.
    """
    with app.test_client() as client:
        yield client


@pytest.fixture
def runner(app):
    """Flask CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def frozen_time():
    """Fixture that freezes time to FROZEN_NOW (2026-01-15 12:00 UTC).

    Yields the TimeProvider for use in tests. Automatically resets
    the default TimeProvider after the test completes.
    """
    provider = TimeProvider(frozen_now=FROZEN_NOW)
    TimeProvider.set_default(provider)
    yield provider
    TimeProvider.reset_default()


@pytest.fixture
def frozen_now():
    """Returns the frozen instant for assertions."""
    return FROZEN_NOW


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def fake_provider():
    """Provider with a small realistic table."""
    return FakeFXProvider({'USD': 1.0, 'EUR': 0.9, 'GBP': 0.8, 'SAR': 3.75, 'JPY': 150.0})


@pytest.fixture
def failing_provider():
    return FakeFXProvider(error=ProviderError("boom"))


@pytest.fixture
def rate_store(memory_store, fake_provider):
    """RateStore backed by memory and the fake provider."""
    return RateStore(memory_store, provider_factory=lambda: fake_provider)


@pytest.fixture
def install_provider(app):
    """Swap the app's rate store for one backed by the given provider."""
    def install(provider):
        store = RateStore(app.extensions['zakat_store'], provider_factory=lambda: provider)
        app.extensions['zakat_rates'] = store
        return store
    return install
