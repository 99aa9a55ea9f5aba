# goe_charger/main.py

from datetime import datetime, timezone
import logging
import time

from .cli import build_parser
from .config import Config
from .logging import ConsoleLog, StructuredLog, PollLogEntry

from .services.charger_client import GoEChargerClient
from .services.charger_handler import ChannelStateCache, ChargerHandler, QueuedCommands
from .services.command_parser import parse_command
from .services.output_formatter import channels_payload, emit_human, emit_json


def run_poll(handler: ChargerHandler, cache: ChannelStateCache, structured_logger: StructuredLog, args) -> None:
    handler.poll()
    cfg = handler.client.cfg

    if not args.quiet:
        if args.json:
            emit_json(cfg.ip, cache.connectivity, cache.values)
        else:
            emit_human(cfg.ip, cache.connectivity, cache.values)

    if structured_logger.enabled:
        structured_logger.write(
            PollLogEntry(
                timestamp=datetime.now(timezone.utc).isoformat(),
                charger=cfg.ip,
                api_version=cfg.api_version,
                connectivity=cache.connectivity.status.value,
                message=cache.connectivity.message,
                channels=channels_payload(cache.values) if cache.connectivity.online else None,
            )
        )


def run_watch(handler, cache, structured_logger, args, log) -> None:
    interval = handler.client.cfg.refresh_interval
    polls = 0
    log.info("Polling %s every %s s", handler.client.cfg.ip, interval)
    try:
        while True:
            run_poll(handler, cache, structured_logger, args)
            polls += 1
            if args.count is not None and polls >= args.count:
                break
            time.sleep(interval)
    except KeyboardInterrupt:
        log.info("Stopped after %d polls", polls)


def run_set(handler: ChargerHandler, cache: ChannelStateCache, args, log) -> bool:
    command = parse_command(args.value)
    sent = handler.process(QueuedCommands([(args.channel, command)]))
    if sent:
        log.info("Updated %s to %s", args.channel, args.value)
        return True
    if not cache.connectivity.online and cache.connectivity.message:
        log.error("Write to %s failed: %s", args.channel, cache.connectivity.message)
    return False


def main():
    parser = build_parser()
    args = parser.parse_args()

    app_cfg = Config.load(args.config)
    console_logger = ConsoleLog(
        level="DEBUG" if args.debug else app_cfg.logging.console_level,
        quiet=args.quiet or app_cfg.logging.console_quiet,
        debug_modules=app_cfg.logging.debug_modules,
    )
    log = console_logger.setup()
    structured_logger = StructuredLog(
        app_cfg.logging.structured_path,
        app_cfg.logging.structured_enabled,
    )
    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.INFO)

    cache = ChannelStateCache()
    client = GoEChargerClient(app_cfg.charger, log)
    handler = ChargerHandler(client, cache, log)

    if args.command == "status":
        run_poll(handler, cache, structured_logger, args)
        if not cache.connectivity.online:
            raise SystemExit(1)
    elif args.command == "watch":
        run_watch(handler, cache, structured_logger, args, log)
    elif args.command == "set":
        if not run_set(handler, cache, args, log):
            raise SystemExit(1)
    else:
        raise ValueError(f"Unsupported command: {args.command}")


if __name__ == "__main__":
    main()
