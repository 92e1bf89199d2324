"""
wifi-health command-line launcher.

Collects a snapshot from the local Wi-Fi adapter and prints it either as
a boxed terminal report or as JSON.

Usage:
    wifi-health [--json] [--interference-only] [--speed-test] [--debug]
                [--log-file PATH]
"""
import argparse
import json
import logging
import sys

from version import __version__
from wifihealth.monitoring.collector import WifiCollector
from wifihealth.ui.report import print_report
from wifihealth.utils.common import load_config
from wifihealth.utils.log import setup_logging

log = logging.getLogger("launcher")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="wifi-health",
        description="Local Wi-Fi health diagnostics",
    )
    parser.add_argument(
        '--json', action='store_true',
        help="Print the snapshot as JSON instead of a terminal report",
    )
    parser.add_argument(
        '--interference-only', action='store_true',
        help="Only run the interference analysis",
    )
    parser.add_argument(
        '--speed-test', action='store_true',
        help="Also run an internet speed test (takes ~30 seconds)",
    )
    parser.add_argument('--debug', action='store_true', help="Enable debug logging")
    parser.add_argument('--log-file', default=None, help="Also log to this rotating file")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def run(args, collector=None):
    """Collect and print a snapshot.  Returns the exit status."""
    if collector is None:
        collector = WifiCollector.from_config(load_config())

    metrics = None if args.interference_only else collector.collect_metrics()
    verdict = collector.check_interference()
    speed = collector.run_speed_test() if args.speed_test else None

    if args.json:
        payload = {"interference": verdict.to_dict()}
        if metrics is not None:
            payload["metrics"] = metrics.to_dict()
        if speed is not None:
            payload["speed_test"] = speed.to_dict()
        print(json.dumps(payload, indent=2))
    else:
        print_report(metrics, verdict, speed)
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.debug else logging.INFO
    # Keep the console quiet so log lines don't interleave with the report
    setup_logging(
        level=level,
        log_file=args.log_file,
        console_level=logging.DEBUG if args.debug else logging.WARNING,
    )
    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(130)


if __name__ == "__main__":
    main()
