"""
Background Rate Refresh Thread

Runs exchange rate refresh in-process as a background thread when the web
app starts. Each wake-up checks whether the rate table is stale and, if so,
refreshes it from the configured provider. Calculations never wait on this
thread; they use whatever table the rate store holds at the time.
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

from zakat.services.config import get_refresh_interval_seconds, is_background_sync_enabled
from zakat.services.rates import RateStore, RefreshResult

logger = logging.getLogger('zakat.background_sync')

# Global to track if refresh thread is running
_sync_thread: Optional[threading.Thread] = None
_stop_event = threading.Event()


def start_background_sync(rate_store: RateStore, interval_seconds: Optional[int] = None,
                          initial_delay: float = 10) -> bool:
    """Start the background refresh thread if not already running.

    Should be called once when the Flask app starts.
    Only runs if RATES_BACKGROUND_SYNC=1 and network access is allowed.

    Returns:
        True if a new thread was started.
    """
    global _sync_thread

    if not is_background_sync_enabled():
        logger.info("Background rate refresh disabled (RATES_BACKGROUND_SYNC != 1)")
        return False

    if _sync_thread is not None and _sync_thread.is_alive():
        logger.info("Background rate refresh thread already running")
        return False

    if interval_seconds is None:
        interval_seconds = get_refresh_interval_seconds()

    _stop_event.clear()
    _sync_thread = threading.Thread(
        target=_sync_loop,
        args=(rate_store, interval_seconds, initial_delay),
        daemon=True,
        name='rate-refresh',
    )
    _sync_thread.start()
    logger.info("Background rate refresh thread started")
    return True


def stop_background_sync():
    """Stop the background refresh thread gracefully."""
    global _sync_thread

    if _sync_thread is None:
        return

    logger.info("Stopping background rate refresh thread...")
    _stop_event.set()
    _sync_thread.join(timeout=5)
    _sync_thread = None
    logger.info("Background rate refresh thread stopped")


def is_running() -> bool:
    return _sync_thread is not None and _sync_thread.is_alive()


def _sync_loop(rate_store: RateStore, interval_seconds: int, initial_delay: float):
    """Main refresh loop that runs in background thread."""
    logger.info(f"Background rate refresh loop started (interval {interval_seconds}s)")

    # Initial delay to let app fully start
    if _stop_event.wait(timeout=initial_delay):
        return

    while not _stop_event.is_set():
        try:
            run_refresh_cycle(rate_store)
        except Exception as e:
            logger.exception(f"Rate refresh cycle failed: {e}")

        next_sync = datetime.now(timezone.utc) + timedelta(seconds=interval_seconds)
        logger.info(f"Next rate check at {next_sync.isoformat()}")

        if _stop_event.wait(timeout=interval_seconds):
            break


def run_refresh_cycle(rate_store: RateStore) -> Optional[RefreshResult]:
    """Execute one refresh cycle. Returns None when rates were still fresh."""
    result = rate_store.refresh_if_stale()
    if result is None:
        logger.info("Exchange rates are fresh, skipping refresh")
    elif result.used_fallback:
        logger.warning(f"Rate refresh fell back to defaults: {result.error_message}")
    else:
        logger.info(f"Rate refresh complete: {result.records_count} rates from {result.source}")
    return result
