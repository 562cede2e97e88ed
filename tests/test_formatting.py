import pytest

from sysstats.monitoring import SystemStats
from sysstats.utils import cpu_level, format_bytes, format_speed, format_status_line, memory_level


@pytest.mark.parametrize("value, expected", [
    (0, "0 B"),
    (1023, "1023 B"),
    (1024, "1.0 KB"),
    (1536, "1.5 KB"),
    (5 * 1024 ** 2, "5.0 MB"),
    (int(7.8 * 1024 ** 3), "7.80 GB"),
])
def test_format_bytes(value, expected):
    assert format_bytes(value) == expected


@pytest.mark.parametrize("value, expected", [
    (0.0, "0 B/s"),
    (300.4, "300 B/s"),
    (1228.8, "1.2 KB/s"),
    (3 * 1024 ** 2, "3.00 MB/s"),
    (2 * 1024 ** 3, "2048.00 MB/s"),
])
def test_format_speed(value, expected):
    assert format_speed(value) == expected


@pytest.mark.parametrize("percent, expected", [(10, "normal"), (50, "normal"), (50.1, "moderate"), (80, "moderate"), (81, "high")])
def test_cpu_level(percent, expected):
    assert cpu_level(percent) == expected


@pytest.mark.parametrize("percent, expected", [(60, "normal"), (61, "moderate"), (80, "moderate"), (95, "high")])
def test_memory_level(percent, expected):
    assert memory_level(percent) == expected


def test_status_line():
    stats = SystemStats(
        cpu_usage=12.4,
        memory_used=3 * 1024 ** 3,
        memory_total=8 * 1024 ** 3,
        memory_percent=37.6,
        download_speed=1228.8,
        upload_speed=300.0,
    )

    assert format_status_line(stats) == "CPU 12% | RAM 38% (3.00 GB / 8.00 GB) | down 1.2 KB/s | up 300 B/s"


def test_status_line_marks_elevated_usage():
    stats = SystemStats(
        cpu_usage=85.2,
        memory_used=6 * 1024 ** 3,
        memory_total=8 * 1024 ** 3,
        memory_percent=70.0,
        download_speed=0.0,
        upload_speed=0.0,
    )

    assert format_status_line(stats) == "CPU 85% [high] | RAM 70% [moderate] (6.00 GB / 8.00 GB) | down 0 B/s | up 0 B/s"
