"""
Result record returned by the system sampler.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class SystemStats:
    """
    One complete sample of CPU, memory and network readings.

    Attributes:
        cpu_usage: Mean utilization across logical cores, in percent
        memory_used: Used physical memory, in bytes
        memory_total: Total physical memory, in bytes
        memory_percent: memory_used / memory_total * 100
        download_speed: Received bytes per second since the previous sample
        upload_speed: Transmitted bytes per second since the previous sample
    """
    cpu_usage: float = 0.0
    memory_used: int = 0
    memory_total: int = 0
    memory_percent: float = 0.0
    download_speed: float = 0.0
    upload_speed: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
