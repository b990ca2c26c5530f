"""Configuration loader for plotscript.

Loads and validates ``defaults.yaml`` (or a user file with the same
schema) into typed, frozen dataclasses.  The gnuplot executable, its
timeout, the default terminal, and layout preferences all come from the
config; nothing is hardcoded in the entry points.

Usage::

    from plotscript.configs.loader import load_config
    cfg = load_config()                     # defaults shipped with the package
    cfg = load_config("/custom/plot.yaml")  # explicit path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from plotscript.utils.fs import load_yaml
from plotscript.utils.logging_config import LOG_LEVELS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunnerConfig:
    """gnuplot process settings."""

    executable: str
    timeout_s: float


@dataclass(frozen=True)
class TerminalConfig:
    """Default output device.  Empty strings leave gnuplot's defaults."""

    device_type: str = ""
    output_path: str = ""


@dataclass(frozen=True)
class LayoutConfig:
    """Multiplot grid preferences."""

    prefer_columns: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    """Logging setup for the entry points."""

    level: str = "INFO"
    json: bool = False
    file: str | None = None


@dataclass(frozen=True)
class PlotConfig:
    """Complete plotscript configuration."""

    runner: RunnerConfig
    terminal: TerminalConfig
    layout: LayoutConfig
    logging: LoggingConfig


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return an optional mapping section, ``{}`` when absent."""
    raw = data.get(name)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Section '{name}' must be a mapping, got {type(raw).__name__}"
        )
    return raw


def _as_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{name}' must be true or false, got {value!r}")
    return value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _validate_config(cfg: PlotConfig) -> None:
    """Validate field values.

    Raises
    ------
    ConfigError
        On any invalid value.
    """
    if not cfg.runner.executable.strip():
        raise ConfigError("runner.executable must not be empty")
    if cfg.runner.timeout_s <= 0:
        raise ConfigError(
            f"runner.timeout_s must be > 0, got {cfg.runner.timeout_s}"
        )
    if cfg.logging.level not in LOG_LEVELS:
        raise ConfigError(
            f"Unknown logging.level '{cfg.logging.level}'. "
            f"Expected one of {list(LOG_LEVELS)}"
        )
    if "'" in cfg.terminal.output_path:
        logger.warning(
            "terminal.output_path contains a single quote and will break "
            "the 'set output' command: %s",
            cfg.terminal.output_path,
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def config_from_dict(data: dict[str, Any]) -> PlotConfig:
    """Build and validate a :class:`PlotConfig` from a parsed mapping.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    """
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )
    try:
        rd = data["runner"]
        runner = RunnerConfig(
            executable=str(rd["executable"]),
            timeout_s=float(rd["timeout_s"]),
        )

        td = _section(data, "terminal")
        terminal = TerminalConfig(
            device_type=_text(td.get("device_type")),
            output_path=_text(td.get("output_path")),
        )

        ld = _section(data, "layout")
        layout = LayoutConfig(
            prefer_columns=_as_bool(
                "layout.prefer_columns", ld.get("prefer_columns", True),
            ),
        )

        gd = _section(data, "logging")
        log_file = gd.get("file")
        logging_cfg = LoggingConfig(
            level=str(gd.get("level", "INFO")).upper(),
            json=_as_bool("logging.json", gd.get("json", False)),
            file=str(log_file) if log_file else None,
        )

        config = PlotConfig(
            runner=runner,
            terminal=terminal,
            layout=layout,
            logging=logging_cfg,
        )
    except KeyError as exc:
        raise ConfigError(
            f"Missing required configuration key: {exc}"
        ) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Invalid configuration value: {exc}"
        ) from exc

    _validate_config(config)
    return config


def load_config(path: str | Path | None = None) -> PlotConfig:
    """Load and validate configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Config file.  ``None`` loads ``defaults.yaml`` shipped alongside
        this module.

    Returns
    -------
    PlotConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)
    data = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")

    config = config_from_dict(data)
    logger.info("Configuration loaded successfully")
    return config
