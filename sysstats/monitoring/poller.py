"""
Periodic sampling helper for callers that want stats on a fixed cadence.
"""
import threading
from typing import Callable, Optional

from sysstats.monitoring.errors import SamplerUnavailableError
from sysstats.monitoring.stats import SystemStats
from sysstats.monitoring.system_monitor import SystemSampler
from sysstats.utils import get_logger

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL_SEC = 2.0


class StatsPoller:
    """
    Calls a sampler every ``interval`` seconds on a daemon timer thread.

    Each new sample is kept as ``latest`` and passed to the optional callback.
    A sample that fails because the OS counters are unavailable is logged and
    skipped; polling continues with the next tick.
    """

    def __init__(self,
                 sampler: SystemSampler,
                 interval: float = DEFAULT_POLL_INTERVAL_SEC,
                 callback: Optional[Callable[[SystemStats], None]] = None):
        """
        :param sampler: Sampler to invoke on every tick
        :param interval: Seconds between the end of one sample and the start of the next
        :param callback: Receives every successful sample
        :raises: ValueError if interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.sampler = sampler
        self.interval = interval
        self._callback = callback

        self._running = threading.Event()
        self._timer: Optional[threading.Timer] = None
        self._timer_lock = threading.Lock()
        self._generation = 0
        self._latest: Optional[SystemStats] = None
        self._latest_lock = threading.Lock()

    @property
    def latest(self) -> Optional[SystemStats]:
        """The most recent successful sample, or None."""
        with self._latest_lock:
            return self._latest

    def is_running(self) -> bool:
        return self._running.is_set()

    def start(self):
        """
        Takes a first sample immediately on a timer thread and keeps polling until stopped.
        """
        with self._timer_lock:
            if self._running.is_set():
                logger.warning("Poller start requested but already running.")
                return
            self._running.set()
            self._generation += 1
            generation = self._generation
        logger.info(f"Starting stats poller (interval={self.interval}s)")
        self._schedule(0, generation)

    def stop(self):
        """
        Stops polling and cancels the pending tick. A sample already in progress
        completes but does not schedule another one, even if the poller is restarted.
        """
        with self._timer_lock:
            if not self._running.is_set():
                logger.debug("Poller stop requested but not running.")
                return
            self._running.clear()
            self._generation += 1
            if self._timer and self._timer.is_alive():
                self._timer.cancel()
                logger.debug("Poll timer cancelled.")
            self._timer = None
        logger.info("Stats poller stopped.")

    def poll_once(self) -> Optional[SystemStats]:
        """
        Takes one sample, records it and hands it to the callback.

        :return: The new sample, or None if the sampler was unavailable
        :rtype: Optional[SystemStats]
        """
        try:
            stats = self.sampler.get_system_stats()
        except SamplerUnavailableError as e:
            logger.error(f"Skipping poll: {e}")
            return None

        with self._latest_lock:
            self._latest = stats

        if self._callback:
            try:
                self._callback(stats)
            except Exception as e:
                logger.error(f"Stats callback raised: {e}", exc_info=True)
        return stats

    def _is_current(self, generation: int) -> bool:
        with self._timer_lock:
            return self._running.is_set() and generation == self._generation

    def _schedule(self, delay: float, generation: int):
        def tick():
            if not self._is_current(generation):
                return
            self.poll_once()
            self._schedule(self.interval, generation)

        with self._timer_lock:
            # A tick from before the last stop() must not start a second chain.
            if not self._running.is_set() or generation != self._generation:
                return
            self._timer = threading.Timer(delay, tick)
            self._timer.daemon = True
            self._timer.start()
        logger.debug(f"Next poll scheduled in {delay} seconds.")
