"""Runtime configuration: config file, environment and CLI overrides.

Precedence, highest first: CLI flags, environment variables, config file,
built-in :class:`relscout.constants.Constants`. Applying configuration never
raises; malformed values are logged and ignored.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from relscout.constants import Constants

logger = logging.getLogger(__name__)


def default_config_paths() -> List[Path]:
    """Config file candidates checked when no explicit path is given."""
    paths = []
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path.cwd() / Constants.CONFIG_FILE_NAME)
    paths.append(Path.home() / ".config" / "relscout" / Constants.CONFIG_FILE_NAME)
    return paths


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load a YAML or JSON config file.

    Args:
        path: Path to a .yml/.yaml/.json file

    Returns:
        Config dict; empty when the file is unreadable or not a mapping.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.suffix.lower() == ".json":
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except FileNotFoundError:
        logger.warning("Config file not found: %s", path)
        return {}
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.warning("Failed to load config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", path)
        return {}
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the explicit config file or the first default one that exists."""
    if path:
        return load_config_file(Path(path))
    for candidate in default_config_paths():
        if candidate.is_file():
            logger.debug("Using config file %s", candidate)
            return load_config_file(candidate)
    return {}


def _positive_int(value: Any) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError(f"expected a positive integer, got {value!r}")
    return number


_SETTERS = {
    "cache_dir": ("CACHE_DIR", str),
    "cache_ttl": ("CACHE_TTL_SEC", _positive_int),
    "request_timeout": ("REQUEST_TIMEOUT", _positive_int),
    "max_workers": ("MAX_WORKERS", _positive_int),
    "user_agent": ("USER_AGENT", str),
}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply recognised config keys onto Constants."""
    for key, value in cfg.items():
        if key not in _SETTERS:
            logger.warning("Unknown config key ignored: %s", key)
            continue
        if value is None:
            continue
        attr, convert = _SETTERS[key]
        try:
            setattr(Constants, attr, convert(value))
        except (TypeError, ValueError) as exc:
            logger.warning("Invalid value for %s: %s", key, exc)


def apply_cli_overrides(args) -> None:
    """Apply CLI overrides (highest precedence) onto Constants."""
    overrides = {
        "cache_dir": getattr(args, "CACHE_DIR", None),
        "cache_ttl": getattr(args, "CACHE_TTL", None),
        "request_timeout": getattr(args, "TIMEOUT", None),
        "max_workers": getattr(args, "JOBS", None),
    }
    apply_config({k: v for k, v in overrides.items() if v is not None})
    # An explicit --cache-dir must also beat RELSCOUT_CACHE_DIR.
    if getattr(args, "CACHE_DIR", None):
        os.environ[Constants.ENV_CACHE_DIR] = str(args.CACHE_DIR)
