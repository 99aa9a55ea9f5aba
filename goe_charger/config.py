# goe_charger/config.py
from dataclasses import dataclass, field
from pathlib import Path
import configparser


SUPPORTED_API_VERSIONS = (1, 2)


@dataclass
class ChargerConfig:
    ip: str
    api_version: int = 1
    refresh_interval: int = 5
    timeout: float = 5.0


@dataclass
class LoggingConfig:
    console_level: str = "INFO"
    console_quiet: bool = False
    debug_modules: list[str] = field(default_factory=list)
    structured_enabled: bool = False
    structured_path: str | None = None


@dataclass
class AppConfig:
    charger: ChargerConfig
    logging: LoggingConfig


class Config:
    def __init__(self, path: str):
        self.path = Path(path)
        self.parser = configparser.ConfigParser(inline_comment_prefixes=("#",))
        read = self.parser.read(self.path)
        if not read:
            raise FileNotFoundError(f"Config file not found: {self.path}")

    @classmethod
    def load(cls, path: str) -> AppConfig:
        cfg = cls(path)

        p = cfg.parser

        def _as_bool(value: str) -> bool:
            return value.strip().lower() == "true"

        # --- Charger ---
        if "charger" not in p:
            raise ValueError("[charger] section missing from config")

        charger_sec = p["charger"]
        ip = charger_sec.get("ip", "").strip()
        if not ip:
            raise ValueError("[charger] ip is required")

        charger_kwargs = {"ip": ip}
        if "api_version" in charger_sec:
            api_version = int(charger_sec["api_version"])
            if api_version not in SUPPORTED_API_VERSIONS:
                raise ValueError(f"Unsupported api_version {api_version} (expected 1 or 2)")
            charger_kwargs["api_version"] = api_version
        if "refresh_interval" in charger_sec:
            refresh_interval = int(charger_sec["refresh_interval"])
            if refresh_interval < 1:
                raise ValueError("[charger] refresh_interval must be at least 1 second")
            charger_kwargs["refresh_interval"] = refresh_interval
        if "timeout" in charger_sec:
            charger_kwargs["timeout"] = float(charger_sec["timeout"])
        charger = ChargerConfig(**charger_kwargs)

        # --- Logging ---
        logging_kwargs = {}
        if "logging" in p:
            logging_sec = p["logging"]
            if "console_level" in logging_sec:
                logging_kwargs["console_level"] = logging_sec["console_level"]
            if "console_quiet" in logging_sec:
                logging_kwargs["console_quiet"] = _as_bool(logging_sec["console_quiet"])
            if "debug_modules" in logging_sec:
                raw = logging_sec["debug_modules"]
                logging_kwargs["debug_modules"] = [x.strip() for x in raw.split(",") if x.strip()]
            if "structured_enabled" in logging_sec:
                logging_kwargs["structured_enabled"] = _as_bool(logging_sec["structured_enabled"])
            if "structured_path" in logging_sec:
                logging_kwargs["structured_path"] = logging_sec["structured_path"]
        logging_cfg = LoggingConfig(**logging_kwargs)

        return AppConfig(
            charger=charger,
            logging=logging_cfg,
        )
