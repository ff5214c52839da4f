"""TOML config loading and profiles."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import structlog

# Default config search path (project root or cwd)
_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent.parent / "config"


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override values take precedence."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _find_config_dir(config_dir: Path | None = None) -> Path:
    if config_dir is not None:
        return config_dir
    cwd_config = Path.cwd() / "config"
    if (cwd_config / "default.toml").exists():
        return cwd_config
    return _CONFIG_DIR


def load_config(profile: str | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """Merged config from default.toml and an optional ``<profile>.toml`` overlay."""
    directory = _find_config_dir(config_dir)
    default_path = directory / "default.toml"
    base = _load_toml(default_path) if default_path.exists() else {}
    if profile:
        profile_path = directory / f"{profile}.toml"
        if profile_path.exists():
            base = _deep_merge(base, _load_toml(profile_path))
    return base


def get_settings(profile: str | None = None, config_dir: Path | None = None) -> Settings:
    """Return Settings instance from merged config."""
    return Settings.from_dict(load_config(profile, config_dir))


class Settings:
    """Application settings from TOML config. Missing keys fall back to the library defaults."""

    def __init__(
        self,
        *,
        logging: dict[str, Any] | None = None,
        pricing: dict[str, Any] | None = None,
        display: dict[str, Any] | None = None,
        history: dict[str, Any] | None = None,
        orderbook: dict[str, Any] | None = None,
        feed: dict[str, Any] | None = None,
        limits: dict[str, Any] | None = None,
        api: dict[str, Any] | None = None,
    ):
        self.logging = logging or {}
        self.pricing = pricing or {}
        self.display = display or {}
        self.history = history or {}
        self.orderbook = orderbook or {}
        self.feed = feed or {}
        self.limits = limits or {}
        self.api = api or {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(
            logging=raw.get("logging"),
            pricing=raw.get("pricing"),
            display=raw.get("display"),
            history=raw.get("history"),
            orderbook=raw.get("orderbook"),
            feed=raw.get("feed"),
            limits=raw.get("limits"),
            api=raw.get("api"),
        )

    @property
    def pool_floor(self) -> float:
        return float(self.pricing.get("pool_floor", 0.0001))

    @property
    def buy_markup(self) -> float:
        return float(self.pricing.get("buy_markup", 1.01))

    @property
    def sell_markdown(self) -> float:
        return float(self.pricing.get("sell_markdown", 0.99))

    @property
    def odds_format(self) -> str:
        return str(self.display.get("odds_format", "EU")).upper()

    @property
    def default_timeframe(self) -> str:
        return str(self.history.get("default_timeframe", "1D")).upper()

    @property
    def trade_window(self) -> int:
        return int(self.orderbook.get("trade_window", 100))

    @property
    def depth_levels(self) -> int:
        return int(self.orderbook.get("depth_levels", 8))

    @property
    def debounce_ms(self) -> int:
        return int(self.feed.get("debounce_ms", 400))

    @property
    def debounce_sec(self) -> float:
        return self.debounce_ms / 1000

    @property
    def base_slippage_limit(self) -> float:
        return float(self.limits.get("base_slippage_limit", 0.15))

    @property
    def no_cooldown_percent(self) -> float:
        return float(self.limits.get("no_cooldown_percent", 0.10))

    @property
    def api_host(self) -> str:
        return self.api.get("host", "127.0.0.1")

    @property
    def api_port(self) -> int:
        return int(self.api.get("port", 8000))

    @property
    def logging_level(self) -> str:
        return self.logging.get("level", "INFO").upper()

    @property
    def logging_format(self) -> str:
        return self.logging.get("format", "console")

    @property
    def logging_level_num(self) -> int:
        return getattr(logging, self.logging_level, logging.INFO)


def configure_logging(settings: Settings) -> None:
    """Configure structlog with settings. Call once at application entry."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.logging_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.logging_level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
