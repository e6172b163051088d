"""
Dashboard data loading: concurrent independent reads and the 30s stats poller.
"""
import logging
import threading
import time
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from api.client import ApiError
from config.constants import DASHBOARD_MAX_WORKERS, DASHBOARD_POLL_SECONDS

logger = logging.getLogger("TicketOps")

LoadResult = namedtuple("LoadResult", ["value", "error"])


def load_concurrently(loaders: dict, max_workers: int = DASHBOARD_MAX_WORKERS) -> dict:
    """
    Run independent loaders in a thread pool.

    Args:
        loaders: name -> zero-argument callable

    Returns:
        name -> LoadResult; one loader failing never affects the others
    """
    if not loaders:
        return {}

    results = {}
    with ThreadPoolExecutor(max_workers=min(max_workers, len(loaders))) as pool:
        futures = {name: pool.submit(loader) for name, loader in loaders.items()}
        for name, future in futures.items():
            try:
                results[name] = LoadResult(future.result(), None)
            except ApiError as e:
                logger.warning(f"Dashboard load '{name}' failed: {e.message}")
                results[name] = LoadResult(None, e.message)
    return results


class DashboardPoller:
    """
    Periodic refresh of dashboard stats.

    A tick never starts while another is still fetching. Each finished fetch
    overwrites the previous result. After close() no result is applied.
    """

    def __init__(self, fetch, apply, interval: int = DASHBOARD_POLL_SECONDS, clock=time.monotonic):
        self.fetch = fetch
        self.apply = apply
        self.interval = interval
        self.clock = clock
        self.last_run = None
        self._lock = threading.Lock()
        self._in_flight = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def is_due(self) -> bool:
        return self.last_run is None or self.clock() - self.last_run >= self.interval

    def tick(self, force: bool = False) -> bool:
        """Fetch and apply once. Returns True when a fresh result was applied."""
        with self._lock:
            if self._closed or self._in_flight or not (force or self.is_due()):
                return False
            self._in_flight = True

        value, failed = None, False
        try:
            value = self.fetch()
        except ApiError as e:
            logger.warning(f"Dashboard refresh failed: {e.message}")
            failed = True
        finally:
            with self._lock:
                self._in_flight = False
                self.last_run = self.clock()

        with self._lock:
            if self._closed or failed:
                return False
            self.apply(value)
        return True

    def close(self):
        with self._lock:
            self._closed = True


def get_greeting(hour: int) -> str:
    if hour < 12:
        return "Good Morning"
    if hour < 18:
        return "Good Afternoon"
    return "Good Evening"


def dashboard_asset_status(status) -> str:
    """Dashboard shows Operational as Online and everything else but Not Installed as Offline."""
    if status == "Operational":
        return "Online"
    if status == "Not Installed":
        return "Not Installed"
    return "Offline"
