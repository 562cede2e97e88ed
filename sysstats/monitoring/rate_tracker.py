"""
Tracks cumulative network counters between samples to derive throughput.
"""
import threading
import time
from typing import Callable, NamedTuple, Optional, Tuple

from sysstats.utils import get_logger

logger = get_logger(__name__)

CounterReader = Callable[[], Tuple[int, int]]


class NetSnapshot(NamedTuple):
    """Cumulative network counters observed at a point in time."""
    timestamp: float
    rx_bytes: int
    tx_bytes: int


def saturating_sub(new: int, old: int) -> int:
    """Returns new - old, clamped at zero."""
    return new - old if new > old else 0


class RateTracker:
    """
    Holds the previous network snapshot and turns new counters into rates.

    A single instance is meant to be created at startup and shared by every
    sampler in the process. The stored snapshot is only read and replaced
    while holding the internal lock, so concurrent callers each see the most
    recently written baseline and never a timestamp paired with stale counters.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize an empty tracker.

        :param clock: Monotonic time source in seconds
        :type clock: Callable[[], float]
        """
        self._clock = clock
        self._lock = threading.Lock()
        self._last: Optional[NetSnapshot] = None

    @property
    def last_snapshot(self) -> Optional[NetSnapshot]:
        """The most recently stored snapshot, or None before the first update."""
        with self._lock:
            return self._last

    def reset(self):
        """Forgets the stored snapshot; the next update reports zero rates."""
        with self._lock:
            self._last = None

    def update(self, rx_total: int, tx_total: int) -> Tuple[float, float]:
        """
        Records counters read by the caller and returns the rates since the last update.

        :param rx_total: Cumulative bytes received across all interfaces
        :type rx_total: int
        :param tx_total: Cumulative bytes transmitted across all interfaces
        :type tx_total: int
        :return: Tuple (download_bytes_per_sec, upload_bytes_per_sec)
        :rtype: Tuple[float, float]
        """
        with self._lock:
            return self._advance(self._clock(), rx_total, tx_total)

    def measure(self, read_counters: CounterReader) -> Tuple[float, float]:
        """
        Reads counters and the clock while holding the lock, then advances.

        Counter order matches baseline order across threads: the deltas reported
        by overlapping callers add up to the traffic between the first and last
        reading.

        :param read_counters: Callable returning (rx_total, tx_total)
        :type read_counters: CounterReader
        :return: Tuple (download_bytes_per_sec, upload_bytes_per_sec)
        :rtype: Tuple[float, float]
        """
        with self._lock:
            rx_total, tx_total = read_counters()
            return self._advance(self._clock(), rx_total, tx_total)

    def _advance(self, now: float, rx_total: int, tx_total: int) -> Tuple[float, float]:
        """
        Computes rates against the stored snapshot and replaces it. Caller holds the lock.

        The first update, a non-positive elapsed time and a counter that went
        backwards all report zero for the affected direction. The snapshot is
        replaced in every case.
        """
        previous = self._last
        self._last = NetSnapshot(now, rx_total, tx_total)

        if previous is None:
            logger.debug("No previous network snapshot; reporting zero rates.")
            return 0.0, 0.0

        elapsed = now - previous.timestamp
        if elapsed <= 0:
            logger.warning(f"Non-positive elapsed time since last network sample ({elapsed:.6f}s); reporting zero rates.")
            return 0.0, 0.0

        if rx_total < previous.rx_bytes or tx_total < previous.tx_bytes:
            logger.warning(
                f"Network counters decreased (rx {previous.rx_bytes} -> {rx_total}, "
                f"tx {previous.tx_bytes} -> {tx_total}); treating regression as no traffic."
            )

        rx_delta = saturating_sub(rx_total, previous.rx_bytes)
        tx_delta = saturating_sub(tx_total, previous.tx_bytes)
        return rx_delta / elapsed, tx_delta / elapsed
