"""
Human-readable rendering of system stats for console output.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sysstats.monitoring.stats import SystemStats

KB = 1024
MB = 1024 * 1024
GB = 1024 * 1024 * 1024

LEVEL_NORMAL = "normal"
LEVEL_MODERATE = "moderate"
LEVEL_HIGH = "high"


def format_bytes(num_bytes: float) -> str:
    """
    Formats a byte count using B, KB, MB or GB.

    :param num_bytes: Number of bytes
    :type num_bytes: float
    :return: Formatted string, e.g. "3.2 GB"
    :rtype: str
    """
    if num_bytes < KB:
        return f"{num_bytes:.0f} B"
    if num_bytes < MB:
        return f"{num_bytes / KB:.1f} KB"
    if num_bytes < GB:
        return f"{num_bytes / MB:.1f} MB"
    return f"{num_bytes / GB:.2f} GB"


def format_speed(bytes_per_sec: float) -> str:
    """
    Formats a transfer rate using B/s, KB/s or MB/s.

    :param bytes_per_sec: Rate in bytes per second
    :type bytes_per_sec: float
    :return: Formatted string, e.g. "1.2 KB/s"
    :rtype: str
    """
    if bytes_per_sec < KB:
        return f"{bytes_per_sec:.0f} B/s"
    if bytes_per_sec < MB:
        return f"{bytes_per_sec / KB:.1f} KB/s"
    return f"{bytes_per_sec / MB:.2f} MB/s"


def cpu_level(percent: float) -> str:
    """Classifies CPU usage: above 80% is high, above 50% moderate."""
    if percent > 80:
        return LEVEL_HIGH
    if percent > 50:
        return LEVEL_MODERATE
    return LEVEL_NORMAL


def memory_level(percent: float) -> str:
    """Classifies memory usage: above 80% is high, above 60% moderate."""
    if percent > 80:
        return LEVEL_HIGH
    if percent > 60:
        return LEVEL_MODERATE
    return LEVEL_NORMAL


def _level_suffix(level: str) -> str:
    return "" if level == LEVEL_NORMAL else f" [{level}]"


def format_status_line(stats: 'SystemStats') -> str:
    """
    Renders a sample as a single status line.

    CPU and RAM readings carry their usage level when it is not normal,
    e.g. "CPU 85% [high]".

    :param stats: The sample to render
    :type stats: SystemStats
    :return: e.g. "CPU 12% | RAM 45% (3.2 GB / 7.8 GB) | down 1.2 KB/s | up 300 B/s"
    :rtype: str
    """
    return (
        f"CPU {stats.cpu_usage:.0f}%{_level_suffix(cpu_level(stats.cpu_usage))} | "
        f"RAM {stats.memory_percent:.0f}%{_level_suffix(memory_level(stats.memory_percent))} "
        f"({format_bytes(stats.memory_used)} / {format_bytes(stats.memory_total)}) | "
        f"down {format_speed(stats.download_speed)} | "
        f"up {format_speed(stats.upload_speed)}"
    )
