"""reversetree configuration management.

Loads configuration from .reversetree/config.yaml with sensible defaults.
All settings can be overridden via environment variables (REVERSETREE_*).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .reversetree/config.yaml (project-local)
3. ~/.reversetree/config.yaml (user-global)
4. Built-in defaults

Thread Safety:
    Uses threading.Lock for thread-safe lazy initialization.
"""


import os
import threading
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from reversetree.foundation.errors import config_error

_ENV_PREFIX = "REVERSETREE_"


@dataclass(frozen=True, slots=True)
class ReverseTreeConfig:
    """Root configuration for reversetree."""

    local_repository: str = "~/.m2/repository"
    """Base directory of the local artifact cache."""

    record_reverse_tree: bool = False
    """Install the reverse tree listener on resolution sessions."""

    debug: bool = False
    """Enable debug logging by default."""

    def local_repository_path(self) -> Path:
        """Local repository as an absolute path with ``~`` expanded."""
        return Path(self.local_repository).expanduser().absolute()


# Global config instance (lazy-loaded, thread-safe)
_config: ReverseTreeConfig | None = None
_config_lock = threading.Lock()


def _coerce(value: str) -> bool | str:
    if value.lower() in ("true", "false", "yes", "no", "1", "0"):
        return value.lower() in ("true", "yes", "1")
    return value


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    Examples:
        REVERSETREE_LOCAL_REPOSITORY=/srv/cache
        REVERSETREE_RECORD_REVERSE_TREE=true
    """
    known = {f.name for f in fields(ReverseTreeConfig)}
    for key, value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        name = key[len(_ENV_PREFIX):].lower()
        if name not in known:
            continue
        if name == "local_repository":
            config_dict[name] = value
        else:
            config_dict[name] = _coerce(value)
    return config_dict


def _load_file(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise config_error(config_path, str(e), cause=e) from e
    if not isinstance(data, dict):
        raise config_error(config_path, "top level must be a mapping")
    return data


def _dict_to_config(data: dict[str, Any]) -> ReverseTreeConfig:
    known = {f.name for f in fields(ReverseTreeConfig)}
    return ReverseTreeConfig(**{k: v for k, v in data.items() if k in known})


def load_config(path: str | Path | None = None) -> ReverseTreeConfig:
    """Load configuration from file with defaults and env overrides.

    Priority (highest to lowest):
    1. Environment variables (REVERSETREE_*)
    2. Explicit path if provided
    3. .reversetree/config.yaml (project-local)
    4. ~/.reversetree/config.yaml (user-global)
    5. Built-in defaults

    Raises:
        ReverseTreeError: If the first config file found is not valid YAML.
    """
    global _config

    config_dict: dict[str, Any] = asdict(ReverseTreeConfig())

    config_paths = []
    if path:
        config_paths.append(Path(path))
    config_paths.extend([
        Path(".reversetree/config.yaml"),
        Path.home() / ".reversetree" / "config.yaml",
    ])

    for config_path in config_paths:
        if config_path.exists():
            config_dict.update(_load_file(config_path))
            break  # Use first found config

    config_dict = _apply_env_overrides(config_dict)

    _config = _dict_to_config(config_dict)
    return _config


def get_config() -> ReverseTreeConfig:
    """Get the current configuration, loading if needed."""
    global _config

    if _config is not None:
        return _config

    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def reset_config() -> None:
    """Reset the global config (useful for testing)."""
    global _config
    with _config_lock:
        _config = None
