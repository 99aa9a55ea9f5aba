#!/usr/bin/env python3
"""Quick helper to dump every decoded channel of a charger."""

from goe_charger.channels import ALL_CHANNELS
from goe_charger.config import Config
from goe_charger.logging import ConsoleLog
from goe_charger.services.charger_client import ChargerCommunicationError, GoEChargerClient
from goe_charger.services.output_formatter import value_to_text
from goe_charger.services.status_decoder import decode


def main() -> None:
    log = ConsoleLog(level="DEBUG").setup()
    cfg = Config.load("goe_charger.conf")
    client = GoEChargerClient(cfg.charger, log)

    print("Read URL:", client.read_url)
    try:
        status = client.fetch_status()
    except ChargerCommunicationError as exc:
        print("Unreachable:", exc)
        return

    print("Raw status:", status)
    for channel_id in ALL_CHANNELS:
        print(f" - {channel_id}: {value_to_text(decode(channel_id, status))}")


if __name__ == "__main__":
    main()
