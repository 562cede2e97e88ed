"""
Monitoring components for the system stats sampler.
"""
from sysstats.monitoring.errors import SamplerUnavailableError
from sysstats.monitoring.stats import SystemStats
from sysstats.monitoring.rate_tracker import RateTracker, NetSnapshot
from sysstats.monitoring.system_monitor import SystemSampler
from sysstats.monitoring.poller import StatsPoller

__all__ = [
    'SamplerUnavailableError',
    'SystemStats',
    'RateTracker',
    'NetSnapshot',
    'SystemSampler',
    'StatsPoller'
]
