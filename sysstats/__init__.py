"""
sysstats - on-demand CPU, memory and network throughput sampling.

Main components:
- SystemSampler: Takes one complete sample per call
- RateTracker: Shared previous-snapshot state used to derive network rates
- SystemStats: The sample record
- StatsPoller: Optional fixed-cadence caller
- ConfigManager: JSON configuration layered over defaults
"""

from .version import __version__, __app_name__

from .config import ConfigManager

from .monitoring import (
    SamplerUnavailableError,
    SystemStats,
    RateTracker,
    SystemSampler,
    StatsPoller
)

__all__ = [
    '__version__',
    '__app_name__',

    'ConfigManager',

    'SamplerUnavailableError',
    'SystemStats',
    'RateTracker',
    'SystemSampler',
    'StatsPoller'
]
