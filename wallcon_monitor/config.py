# wallcon_monitor/config.py
from dataclasses import dataclass, field
from pathlib import Path
import configparser
import math


DEFAULT_CONFIG_PATH = "wallcon_monitor.conf"
MAX_REFRESH_DELAY = 24 * 3600.0   # seconds


def check_refresh_delay(delay: float) -> float:
    if not math.isfinite(delay) or delay <= 0:
        raise ValueError(f"delay must be a positive number of seconds, got {delay:g}")
    if delay > MAX_REFRESH_DELAY:
        raise ValueError(f"delay must be at most {MAX_REFRESH_DELAY:g} seconds, got {delay:g}")
    return delay


@dataclass
class WallConnectorConfig:
    host: str = ""        # always taken from the command line
    timeout: float | None = 10.0


@dataclass
class RefreshConfig:
    delay: float = 5.0


@dataclass
class LoggingConfig:
    console_level: str = "WARNING"
    console_quiet: bool = False
    debug_modules: list[str] = field(default_factory=list)
    response_log: str | None = None


@dataclass
class AppConfig:
    wall_connector: WallConnectorConfig
    refresh: RefreshConfig
    logging: LoggingConfig


class Config:
    def __init__(self, path: str | None, required: bool = False):
        self.path = Path(path) if path else None
        self.parser = configparser.ConfigParser(inline_comment_prefixes=("#",))
        try:
            read = self.parser.read(self.path) if self.path else []
        except configparser.Error as exc:
            raise ValueError(f"Invalid config file {self.path}: {exc}") from exc
        if required and not read:
            raise FileNotFoundError(f"Config file not found: {self.path}")

    @classmethod
    def load(cls, path: str | None, required: bool = False) -> AppConfig:
        cfg = cls(path, required=required)

        p = cfg.parser

        def _as_bool(value: str) -> bool:
            return value.strip().lower() == "true"

        def _maybe_float(raw: str | None) -> float | None:
            if raw is None:
                return None
            raw = raw.strip()
            if not raw:
                return None
            return float(raw)

        # --- Wall connector ---
        wc_kwargs = {}
        if "wall_connector" in p:
            wc_sec = p["wall_connector"]
            if "timeout" in wc_sec:
                timeout = _maybe_float(wc_sec["timeout"])
                if timeout is not None and (not math.isfinite(timeout) or timeout < 0):
                    raise ValueError(f"[wall_connector] timeout must be zero or positive, got {timeout:g}")
                wc_kwargs["timeout"] = timeout if timeout else None
        wall_connector_cfg = WallConnectorConfig(**wc_kwargs)

        # --- Refresh ---
        refresh_kwargs = {}
        if "refresh" in p:
            refresh_sec = p["refresh"]
            if (delay := _maybe_float(refresh_sec.get("delay"))) is not None:
                try:
                    refresh_kwargs["delay"] = check_refresh_delay(delay)
                except ValueError as exc:
                    raise ValueError(f"[refresh] {exc}") from None
        refresh_cfg = RefreshConfig(**refresh_kwargs)

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
            if "response_log" in logging_sec:
                logging_kwargs["response_log"] = logging_sec["response_log"].strip() or None
        logging_cfg = LoggingConfig(**logging_kwargs)

        return AppConfig(
            wall_connector=wall_connector_cfg,
            refresh=refresh_cfg,
            logging=logging_cfg,
        )
