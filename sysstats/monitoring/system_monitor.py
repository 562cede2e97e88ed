"""
System monitoring functionality for sampling CPU, memory and network usage.
"""
import asyncio
import time
from typing import Any, Callable, List, Optional, Sequence, Tuple, TYPE_CHECKING

import psutil

from sysstats.monitoring.errors import SamplerUnavailableError
from sysstats.monitoring.rate_tracker import RateTracker
from sysstats.monitoring.stats import SystemStats
from sysstats.utils import get_logger

if TYPE_CHECKING:
    from sysstats.config import ConfigManager

logger = get_logger(__name__)

DEFAULT_CPU_INTERVAL_SEC = 0.1

_INTROSPECTION_ERRORS = (psutil.Error, OSError, NotImplementedError)


def _cpu_busy_and_total(cpu_times: Any) -> Tuple[float, float]:
    """
    Splits one core's cumulative CPU times into busy and total seconds.

    Idle time includes iowait where the platform reports it. Guest time is
    already accounted for in user/nice on Linux, so it is left out of the total.
    """
    fields = cpu_times._asdict()
    total = sum(fields.values()) - fields.get('guest', 0.0) - fields.get('guest_nice', 0.0)
    idle = fields.get('idle', 0.0) + fields.get('iowait', 0.0)
    return total - idle, total


def compute_cpu_percent(before: Sequence[Any], after: Sequence[Any]) -> float:
    """
    Averages per-core utilization between two per-core CPU time snapshots.

    :param before: Per-core CPU times taken first
    :type before: Sequence
    :param after: Per-core CPU times taken after the measurement interval
    :type after: Sequence
    :return: Mean utilization across cores in percent; 0.0 if no cores were reported
    :rtype: float
    """
    per_core: List[float] = []
    for first, second in zip(before, after):
        busy_1, total_1 = _cpu_busy_and_total(first)
        busy_2, total_2 = _cpu_busy_and_total(second)
        total_delta = total_2 - total_1
        if total_delta <= 0:
            per_core.append(0.0)
            continue
        busy_delta = max(busy_2 - busy_1, 0.0)
        per_core.append(busy_delta / total_delta * 100.0)

    return sum(per_core) / max(len(per_core), 1)


class SystemSampler:
    """
    Samples CPU, memory and network usage on demand.

    Each call blocks for the CPU measurement interval. CPU and memory readings
    are instantaneous and touch no shared state; network throughput is derived
    from the ``RateTracker`` handed to the sampler, which keeps the cumulative
    counters from the previous call. Share one tracker between samplers that
    should report rates against the same baseline.
    """

    def __init__(self,
                 rate_tracker: Optional[RateTracker] = None,
                 cpu_interval: float = DEFAULT_CPU_INTERVAL_SEC,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize the sampler.

        :param rate_tracker: Tracker holding the previous network snapshot; a new one is created if omitted
        :type rate_tracker: Optional[RateTracker]
        :param cpu_interval: Seconds to wait between the two CPU snapshots
        :type cpu_interval: float
        :param sleep: Blocking sleep used for the CPU interval
        :type sleep: Callable[[float], None]
        :raises: ValueError if cpu_interval is not positive
        """
        if cpu_interval <= 0:
            raise ValueError(f"cpu_interval must be positive, got {cpu_interval}")
        self.rate_tracker = rate_tracker if rate_tracker is not None else RateTracker()
        self.cpu_interval = cpu_interval
        self._sleep = sleep
        logger.debug(f"SystemSampler initialized (cpu_interval={cpu_interval}s)")

    @classmethod
    def from_config(cls, config: 'ConfigManager', rate_tracker: Optional[RateTracker] = None) -> 'SystemSampler':
        """
        Builds a sampler using the ``sampler.*`` configuration keys.

        :param config: Loaded configuration
        :type config: ConfigManager
        :param rate_tracker: Shared tracker, if the application already owns one
        :type rate_tracker: Optional[RateTracker]
        :return: Configured sampler
        :rtype: SystemSampler
        """
        interval = config.get('sampler.cpu_interval_sec', DEFAULT_CPU_INTERVAL_SEC)
        return cls(rate_tracker=rate_tracker, cpu_interval=float(interval))

    def get_system_stats(self) -> SystemStats:
        """
        Takes one complete sample.

        :return: CPU, memory and network readings
        :rtype: SystemStats
        :raises: SamplerUnavailableError if the OS counters cannot be read
        """
        before = self._read_cpu_times()
        self._sleep(self.cpu_interval)
        after = self._read_cpu_times()
        return self._assemble(compute_cpu_percent(before, after))

    async def get_system_stats_async(self) -> SystemStats:
        """
        Takes one complete sample, awaiting the CPU interval instead of blocking.

        The psutil reads and the rate tracker update run in the loop's default
        executor, so a contended tracker lock never blocks the event loop.

        :return: CPU, memory and network readings
        :rtype: SystemStats
        :raises: SamplerUnavailableError if the OS counters cannot be read
        """
        loop = asyncio.get_running_loop()
        before = await loop.run_in_executor(None, self._read_cpu_times)
        await asyncio.sleep(self.cpu_interval)
        after = await loop.run_in_executor(None, self._read_cpu_times)
        return await loop.run_in_executor(None, self._assemble, compute_cpu_percent(before, after))

    def get_memory_usage(self) -> Tuple[int, int, float]:
        """
        Gets current physical memory usage.

        :return: Tuple (used_bytes, total_bytes, percent); percent is 0.0 when total is 0
        :rtype: Tuple[int, int, float]
        :raises: SamplerUnavailableError if memory counters cannot be read
        """
        try:
            virtual_mem = psutil.virtual_memory()
        except _INTROSPECTION_ERRORS as e:
            logger.error(f"Error reading memory counters: {e}", exc_info=True)
            raise SamplerUnavailableError(f"Memory counters unavailable: {e}") from e

        used = int(virtual_mem.used)
        total = int(virtual_mem.total)
        return used, total, used / max(total, 1) * 100.0

    def get_network_totals(self) -> Tuple[int, int]:
        """
        Sums cumulative received and transmitted bytes over all network interfaces.

        :return: Tuple (rx_bytes, tx_bytes)
        :rtype: Tuple[int, int]
        :raises: SamplerUnavailableError if network counters cannot be read
        """
        try:
            per_nic = psutil.net_io_counters(pernic=True)
        except _INTROSPECTION_ERRORS as e:
            logger.error(f"Error reading network counters: {e}", exc_info=True)
            raise SamplerUnavailableError(f"Network counters unavailable: {e}") from e

        rx_total = 0
        tx_total = 0
        for counters in per_nic.values():
            rx_total += int(counters.bytes_recv)
            tx_total += int(counters.bytes_sent)
        return rx_total, tx_total

    def get_network_speed(self) -> Tuple[float, float]:
        """
        Gets throughput since the previous network measurement on the shared tracker.

        :return: Tuple (download_bytes_per_sec, upload_bytes_per_sec)
        :rtype: Tuple[float, float]
        :raises: SamplerUnavailableError if network counters cannot be read
        """
        return self.rate_tracker.measure(self.get_network_totals)

    def _read_cpu_times(self) -> List[Any]:
        try:
            return list(psutil.cpu_times(percpu=True))
        except _INTROSPECTION_ERRORS as e:
            logger.error(f"Error reading CPU counters: {e}", exc_info=True)
            raise SamplerUnavailableError(f"CPU counters unavailable: {e}") from e

    def _assemble(self, cpu_usage: float) -> SystemStats:
        memory_used, memory_total, memory_percent = self.get_memory_usage()
        download_speed, upload_speed = self.get_network_speed()

        stats = SystemStats(
            cpu_usage=cpu_usage,
            memory_used=memory_used,
            memory_total=memory_total,
            memory_percent=memory_percent,
            download_speed=download_speed,
            upload_speed=upload_speed,
        )
        logger.debug(f"System stats collected: {stats}")
        return stats
