"""Configuration management for reversetree."""

from reversetree.foundation.config.loader import (
    ReverseTreeConfig,
    get_config,
    load_config,
    reset_config,
)

__all__ = [
    "ReverseTreeConfig",
    "get_config",
    "load_config",
    "reset_config",
]
