# goe_charger/cli.py
import argparse

from goe_charger.channels import WRITABLE_CHANNELS


def build_parser():
    parser = argparse.ArgumentParser(
        prog="goe-charger",
        description="go-e Charger local API adapter"
    )

    parser.add_argument(
        "--config",
        default="goe_charger.conf",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress stdout output (cron-friendly)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of human-readable text"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # One-shot poll
    sub.add_parser("status", help="Poll the charger once and print every channel")

    # Repeated polling
    cmd_watch = sub.add_parser(
        "watch",
        help="Poll the charger every refresh_interval seconds",
    )
    cmd_watch.add_argument(
        "--count",
        type=int,
        default=None,
        help="Stop after this many polls (default: run until interrupted)",
    )

    # Channel write
    cmd_set = sub.add_parser(
        "set",
        help="Send a command to a writable channel",
    )
    cmd_set.add_argument(
        "channel",
        choices=sorted(WRITABLE_CHANNELS),
        help="Channel to update",
    )
    cmd_set.add_argument(
        "value",
        help="ON/OFF, a number, a quantity such as '16 A' or '11 kWh', or an access mode",
    )

    return parser
