"""
Utility functions for the system stats sampler.
"""
from sysstats.utils.logger import get_logger, setup_logger
from sysstats.utils.formatting import (
    format_bytes,
    format_speed,
    format_status_line,
    cpu_level,
    memory_level
)

__all__ = [
    'get_logger',
    'setup_logger',
    'format_bytes',
    'format_speed',
    'format_status_line',
    'cpu_level',
    'memory_level'
]
