"""Configuration loading and document descriptions."""

from plotscript.configs.document_loader import document_from_dict, load_document
from plotscript.configs.loader import (
    ConfigError,
    LayoutConfig,
    LoggingConfig,
    PlotConfig,
    RunnerConfig,
    TerminalConfig,
    config_from_dict,
    load_config,
)

__all__ = [
    "ConfigError",
    "LayoutConfig",
    "LoggingConfig",
    "PlotConfig",
    "RunnerConfig",
    "TerminalConfig",
    "config_from_dict",
    "document_from_dict",
    "load_config",
    "load_document",
]
