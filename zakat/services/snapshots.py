"""Remembering the last entered calculation snapshot."""
from zakat.constants import SNAPSHOT_STORE_KEY
from zakat.services.calc import build_input
from zakat.services.models import CalculationInput
from zakat.services.store import KeyValueStore


def empty_snapshot() -> dict:
    """Snapshot with every category at zero and configured default prices."""
    return build_input({}).to_dict()


def load_snapshot(store: KeyValueStore) -> dict:
    """Return the remembered snapshot, or the empty one."""
    snapshot = store.load(SNAPSHOT_STORE_KEY, None)
    if not isinstance(snapshot, dict):
        return empty_snapshot()
    return snapshot


def remember_snapshot(store: KeyValueStore, calc_input: CalculationInput) -> dict:
    """Store the normalized form of calc_input and return it."""
    snapshot = calc_input.to_dict()
    store.save(SNAPSHOT_STORE_KEY, snapshot)
    return snapshot


def clear_snapshot(store: KeyValueStore) -> dict:
    """Clear-all: forget the remembered snapshot."""
    store.delete(SNAPSHOT_STORE_KEY)
    return empty_snapshot()
