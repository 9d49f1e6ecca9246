"""
Application settings.

Sources, lowest to highest precedence:
  1. defaults (./data, ./stores)
  2. a YAML file (path from OFD_WEBUI_CONFIG or passed explicitly)
  3. environment variables
  4. explicit overrides passed to create_app()
"""

import logging
import os
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

# Setting name -> environment variable
ENV_VARS = {
    'data_root': 'PUBLIC_DATA_PATH',
    'store_root': 'PUBLIC_STORES_PATH',
    'secret_key': 'SECRET_KEY',
    'log_level': 'OFD_LOG_LEVEL',
    'preload_catalog': 'OFD_PRELOAD_CATALOG',
}

CONFIG_ENV_VAR = 'OFD_WEBUI_CONFIG'

LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class Settings:
    data_root: Path = Path("./data")
    store_root: Path = Path("./stores")
    secret_key: str = "dev-secret-change-me"
    log_level: str = "INFO"
    preload_catalog: bool = False

    def resolved(self) -> "Settings":
        """Copy with both roots made absolute."""
        return replace(
            self,
            data_root=Path(self.data_root).expanduser().resolve(),
            store_root=Path(self.store_root).expanduser().resolve(),
        )


def _coerce(name: str, value: Any) -> Any:
    if name in ('data_root', 'store_root'):
        return Path(value)
    if name == 'preload_catalog':
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE_VALUES
    if name == 'log_level':
        return str(value).upper()
    return str(value)


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load settings from a YAML file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown settings in {path}: {', '.join(unknown)}")
    return data


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> Settings:
    """Assemble Settings from file, environment and explicit overrides."""
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    if config_path is None and environ.get(CONFIG_ENV_VAR):
        config_path = Path(environ[CONFIG_ENV_VAR])
    if config_path is not None:
        values.update(_load_yaml(Path(config_path)))

    for name, var in ENV_VARS.items():
        if environ.get(var):
            values[name] = environ[var]

    values.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(values) - {f.name for f in fields(Settings)})
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

    return Settings(**{k: _coerce(k, v) for k, v in values.items()}).resolved()


def configure_logging(level: str = "INFO") -> None:
    """Install a console handler on the root logger once."""
    root = logging.getLogger()
    if not any(getattr(h, '_ofd_webui', False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ofd_webui = True
        root.addHandler(handler)
    root.setLevel(level)
