"""Configuration loading.

Precedence, lowest first: defaults, YAML config file, environment.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
import yaml  # type: ignore[import-untyped]

from sessionkeeper.exceptions import ConfigurationError

logger = structlog.get_logger()

DEFAULT_SESSION_DIR = Path.home() / ".local" / "share" / "sessionkeeper" / "sessions"
DEFAULT_ACTIVE_SESSION_ENV = "SESSIONKEEPER_ACTIVE_SESSION"

ENV_SESSION_DIR = "SESSIONKEEPER_SESSION_DIR"
ENV_AUTOLOAD = "SESSIONKEEPER_AUTOLOAD"
ENV_DEBUG = "SESSIONKEEPER_DEBUG"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass
class Settings:
    """Runtime settings."""

    session_dir: Path = field(default_factory=lambda: DEFAULT_SESSION_DIR)
    extension: str = ".json"
    # False, "last", "auto_cwd", "last_cwd", or a directory / session name
    autoload: Union[str, bool] = False
    active_session_env: str = DEFAULT_ACTIVE_SESSION_ENV
    debug: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "session_dir": str(self.session_dir),
            "extension": self.extension,
            "autoload": self.autoload,
            "active_session_env": self.active_session_env,
            "debug": self.debug,
        }


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_autoload(value: str) -> Union[str, bool]:
    stripped = value.strip()
    if not stripped or stripped.lower() in _FALSE_VALUES:
        return False
    return stripped


def _read_config_file(config_file: Path) -> Dict[str, Any]:
    """Read and validate the YAML config file."""
    try:
        data = yaml.safe_load(config_file.read_text())
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {config_file}: {e}"
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_file} must contain a mapping")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown config keys in {config_file}: {', '.join(unknown)}"
        )
    return data


def _validate(settings: Settings) -> Settings:
    if not isinstance(settings.extension, str) or not settings.extension.startswith(
        "."
    ):
        raise ConfigurationError(
            f"extension must start with '.', got {settings.extension!r}"
        )
    if settings.autoload is True or not isinstance(settings.autoload, (str, bool)):
        raise ConfigurationError(f"Unknown autoload value {settings.autoload!r}")
    if not isinstance(settings.active_session_env, str) or not (
        settings.active_session_env
    ):
        raise ConfigurationError(
            "active_session_env must be an environment variable name, "
            f"got {settings.active_session_env!r}"
        )
    if not isinstance(settings.debug, bool):
        raise ConfigurationError(f"debug must be a boolean, got {settings.debug!r}")
    return settings


def load_config(config_file: Optional[Path] = None) -> Settings:
    """Build settings from defaults, an optional YAML file and the environment.

    Args:
        config_file: Optional path to a YAML config file

    Returns:
        Validated settings

    Raises:
        ConfigurationError: Unreadable file, bad YAML, unknown keys or values
    """
    values: Dict[str, Any] = {}

    if config_file is not None:
        values.update(_read_config_file(config_file))
        logger.debug("Loaded config file", path=str(config_file))

    env_session_dir = os.environ.get(ENV_SESSION_DIR)
    if env_session_dir:
        values["session_dir"] = env_session_dir

    env_autoload = os.environ.get(ENV_AUTOLOAD)
    if env_autoload is not None:
        values["autoload"] = _parse_autoload(env_autoload)

    env_debug = os.environ.get(ENV_DEBUG)
    if env_debug:
        values["debug"] = _parse_bool(ENV_DEBUG, env_debug)

    if "session_dir" in values:
        session_dir = values["session_dir"]
        if not isinstance(session_dir, (str, Path)) or not str(session_dir):
            raise ConfigurationError(
                f"session_dir must be a path, got {session_dir!r}"
            )
        values["session_dir"] = Path(session_dir).expanduser()

    return _validate(Settings(**values))
