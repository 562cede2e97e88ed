"""
Command-line entry point for the system stats sampler.
Prints one sample, or keeps polling with --watch.
"""
import argparse
import json
import sys
import threading
from typing import List, Optional

from sysstats.config import ConfigManager
from sysstats.monitoring import RateTracker, SamplerUnavailableError, StatsPoller, SystemSampler, SystemStats
from sysstats.utils import format_status_line, get_logger, setup_logger
from sysstats.version import __app_name__, __version__

logger = get_logger("sysstats.main")


def _render(stats: SystemStats, as_json: bool) -> str:
    if as_json:
        return json.dumps(stats.to_dict())
    return format_status_line(stats)


def _configure_logging(config: ConfigManager):
    setup_logger(
        name="sysstats",
        console_level_name=config.get('logging.console_level', 'INFO'),
        file_level_name=config.get('logging.file_level', 'DEBUG'),
        log_file_path=config.get('logging.file_path'),
    )


def _run_once(sampler: SystemSampler, as_json: bool) -> int:
    """Prints a single sample. The tracker is primed first so the rates cover the CPU interval."""
    sampler.get_network_speed()
    stats = sampler.get_system_stats()
    print(_render(stats, as_json), flush=True)
    return 0


def _run_watch(sampler: SystemSampler, interval: float, count: Optional[int], as_json: bool) -> int:
    """Prints a sample every interval until interrupted or count samples were printed."""
    done = threading.Event()
    printed = 0

    def on_sample(stats: SystemStats):
        nonlocal printed
        if done.is_set():
            return
        print(_render(stats, as_json), flush=True)
        printed += 1
        if count is not None and printed >= count:
            done.set()

    poller = StatsPoller(sampler, interval=interval, callback=on_sample)
    poller.start()
    try:
        while not done.wait(timeout=0.5):
            pass
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received (Ctrl+C). Stopping...")
    finally:
        poller.stop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=__app_name__, description="Report CPU, memory and network usage.")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('--config', help='Path to a JSON configuration file (optional).')
    parser.add_argument('--json', action='store_true', help='Print samples as JSON lines.')
    parser.add_argument('--watch', action='store_true', help='Keep sampling until interrupted.')
    parser.add_argument('--interval', type=float, help='Seconds between samples in watch mode (overrides config).')
    parser.add_argument('--count', type=int, help='Stop watch mode after this many samples.')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parses arguments and runs the requested mode.

    :param argv: Argument list, defaults to sys.argv[1:]
    :return: Process exit code
    :rtype: int
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.interval is not None and args.interval <= 0:
        parser.error("--interval must be positive")
    if args.count is not None and args.count <= 0:
        parser.error("--count must be positive")

    try:
        config = ConfigManager(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    _configure_logging(config)

    # One tracker for the lifetime of the process.
    rate_tracker = RateTracker()
    try:
        sampler = SystemSampler.from_config(config, rate_tracker=rate_tracker)
        if args.watch:
            interval = args.interval if args.interval is not None else float(config.get('poller.interval_sec'))
            return _run_watch(sampler, interval, args.count, args.json)
        return _run_once(sampler, args.json)
    except SamplerUnavailableError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
