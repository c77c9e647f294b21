"""Per-app access to the snapshot store and the rate store."""
from flask import current_app

from zakat.services.rates import RateStore
from zakat.services.store import KeyValueStore, MemoryStore


def get_store() -> KeyValueStore:
    """Get the key/value store bound to the current app."""
    return current_app.extensions['zakat_store']


def get_rate_store() -> RateStore:
    """Get the rate store bound to the current app."""
    return current_app.extensions['zakat_rates']


def init_app(app):
    """Create the stores for app.

    A KeyValueStore may be supplied through the ZAKAT_STORE config key;
    otherwise an in-memory store is used.
    """
    store = app.config.get('ZAKAT_STORE') or MemoryStore()
    app.extensions['zakat_store'] = store
    app.extensions['zakat_rates'] = RateStore(store)
