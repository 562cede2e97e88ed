import threading
import time
from unittest.mock import Mock

import pytest

from sysstats.monitoring import SamplerUnavailableError, StatsPoller, SystemStats


def make_stats(cpu_usage=10.0):
    return SystemStats(cpu_usage=cpu_usage, memory_used=1, memory_total=2, memory_percent=50.0)


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        StatsPoller(Mock(), interval=0)


def test_poll_once_records_latest_and_calls_back():
    stats = make_stats()
    sampler = Mock()
    sampler.get_system_stats.return_value = stats
    received = []
    poller = StatsPoller(sampler, callback=received.append)

    assert poller.latest is None
    assert poller.poll_once() is stats
    assert poller.latest is stats
    assert received == [stats]


def test_unavailable_sampler_is_skipped():
    sampler = Mock()
    sampler.get_system_stats.side_effect = SamplerUnavailableError("no counters")
    callback = Mock()
    poller = StatsPoller(sampler, callback=callback)

    assert poller.poll_once() is None
    assert poller.latest is None
    callback.assert_not_called()


def test_callback_errors_do_not_escape():
    sampler = Mock()
    sampler.get_system_stats.return_value = make_stats()
    poller = StatsPoller(sampler, callback=Mock(side_effect=RuntimeError("boom")))

    assert poller.poll_once() is not None


def test_start_polls_repeatedly_until_stopped():
    samples = iter(make_stats(cpu_usage=float(i)) for i in range(1000))
    sampler = Mock()
    sampler.get_system_stats.side_effect = lambda: next(samples)
    three_seen = threading.Event()
    received = []

    def on_sample(stats):
        received.append(stats)
        if len(received) >= 3:
            three_seen.set()

    poller = StatsPoller(sampler, interval=0.01, callback=on_sample)
    poller.start()
    poller.start()
    try:
        assert three_seen.wait(timeout=5)
        assert poller.is_running()
    finally:
        poller.stop()

    assert not poller.is_running()
    assert [s.cpu_usage for s in received[:3]] == [0.0, 1.0, 2.0]
    assert poller.latest is not None


def test_stop_without_start_is_noop():
    poller = StatsPoller(Mock())
    poller.stop()
    assert not poller.is_running()


def test_restart_during_in_flight_sample_keeps_a_single_chain():
    first_call_started = threading.Event()
    release_first_call = threading.Event()
    calls = []
    calls_lock = threading.Lock()

    def get_system_stats():
        with calls_lock:
            calls.append(time.monotonic())
            call_number = len(calls)
        if call_number == 1:
            first_call_started.set()
            release_first_call.wait(timeout=5)
        return make_stats()

    sampler = Mock()
    sampler.get_system_stats.side_effect = get_system_stats
    poller = StatsPoller(sampler, interval=0.1)

    poller.start()
    assert first_call_started.wait(timeout=5)
    poller.stop()
    poller.start()
    release_first_call.set()
    try:
        time.sleep(1.0)
    finally:
        poller.stop()

    # One chain yields about 11 samples in a second (plus the blocked one); two chains about twice that.
    assert len(calls) <= 15

    settled = len(calls)
    time.sleep(0.3)
    assert len(calls) <= settled + 1
