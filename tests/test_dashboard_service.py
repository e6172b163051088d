import threading
from unittest.mock import MagicMock

import pytest

from api.client import ApiError
from services.dashboard_service import (
    DashboardPoller,
    dashboard_asset_status,
    get_greeting,
    load_concurrently,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


class TestLoadConcurrently:
    def test_results_are_independent(self):
        def broken():
            raise ApiError("Failed to load RMA records", 500)

        results = load_concurrently({"tickets": lambda: ["t1"], "rma": broken})
        assert results["tickets"].value == ["t1"]
        assert results["tickets"].error is None
        assert results["rma"].value is None
        assert results["rma"].error == "Failed to load RMA records"

    def test_no_loaders(self):
        assert load_concurrently({}) == {}

    def test_loaders_run_in_parallel(self):
        barrier = threading.Barrier(2, timeout=5)

        def wait():
            barrier.wait()
            return "ok"

        results = load_concurrently({"a": wait, "b": wait})
        assert results["a"].value == results["b"].value == "ok"


class TestDashboardPoller:
    def test_first_tick_applies(self, clock):
        apply = MagicMock()
        poller = DashboardPoller(fetch=lambda: "stats", apply=apply, interval=30, clock=clock)
        assert poller.tick()
        apply.assert_called_once_with("stats")

    def test_waits_for_interval(self, clock):
        apply = MagicMock()
        poller = DashboardPoller(fetch=lambda: "stats", apply=apply, interval=30, clock=clock)
        poller.tick()
        clock.now = 29
        assert not poller.tick()
        clock.now = 30
        assert poller.tick()
        assert apply.call_count == 2

    def test_force_ignores_interval(self, clock):
        apply = MagicMock()
        poller = DashboardPoller(fetch=lambda: "stats", apply=apply, interval=30, clock=clock)
        poller.tick()
        assert poller.tick(force=True)

    def test_last_result_wins(self, clock):
        values = iter(["first", "second"])
        applied = []
        poller = DashboardPoller(fetch=lambda: next(values), apply=applied.append, interval=30, clock=clock)
        poller.tick()
        poller.tick(force=True)
        assert applied == ["first", "second"]

    def test_no_apply_after_close(self, clock):
        apply = MagicMock()
        poller = DashboardPoller(fetch=lambda: "stats", apply=apply, clock=clock)
        poller.close()
        assert poller.closed
        assert not poller.tick(force=True)
        apply.assert_not_called()

    def test_close_during_fetch_drops_result(self, clock):
        apply = MagicMock()
        holder = {}

        def fetch():
            holder["poller"].close()
            return "late"

        holder["poller"] = DashboardPoller(fetch=fetch, apply=apply, clock=clock)
        assert not holder["poller"].tick()
        apply.assert_not_called()

    def test_ticks_do_not_overlap(self, clock):
        started = threading.Event()
        release = threading.Event()
        calls = []

        def slow_fetch():
            calls.append(1)
            started.set()
            release.wait(5)
            return "stats"

        poller = DashboardPoller(fetch=slow_fetch, apply=MagicMock(), clock=clock)
        worker = threading.Thread(target=poller.tick)
        worker.start()
        started.wait(5)
        assert not poller.tick(force=True)
        release.set()
        worker.join(5)
        assert len(calls) == 1

    def test_failed_fetch_keeps_previous_state(self, clock):
        applied = []
        responses = iter(["good"])

        def fetch():
            try:
                return next(responses)
            except StopIteration:
                raise ApiError("Failed to load dashboard data", 503)

        poller = DashboardPoller(fetch=fetch, apply=applied.append, clock=clock)
        assert poller.tick()
        assert not poller.tick(force=True)
        assert applied == ["good"]
        assert poller.last_run is not None


@pytest.mark.parametrize("hour, greeting", [
    (0, "Good Morning"), (11, "Good Morning"), (12, "Good Afternoon"), (17, "Good Afternoon"), (18, "Good Evening"),
])
def test_greeting(hour, greeting):
    assert get_greeting(hour) == greeting


def test_dashboard_asset_status():
    assert dashboard_asset_status("Operational") == "Online"
    assert dashboard_asset_status("Not Installed") == "Not Installed"
    assert dashboard_asset_status("Degraded") == "Offline"
