"""Configuration loader for secret-registrar."""
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

SUPPORTED_APPS = ("actions", "codespaces", "dependabot")
REPO_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$')

DEFAULT_GITHUB_SETTINGS: Dict[str, Optional[str]] = {
    "repo": None,
    "env": None,
    "app": None,
    "gh_path": "gh",
}


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def default_config_path() -> Path:
    """XDG location: ~/.config/secret-registrar/config.yml"""
    return Path.home() / ".config" / "secret-registrar" / "config.yml"


def resolve_config_path(config_path: Optional[str] = None) -> Tuple[Optional[Path], str]:
    """
    Work out which config file applies.

    Priority order:
    1. Explicit path (e.g. --config); must exist
    2. Default location: ~/.config/secret-registrar/config.yml
    3. No file; built-in defaults are used

    Returns:
        Tuple of (path or None, source) where source is "argument",
        "default" or "builtin"

    Raises:
        ConfigError: If an explicit path does not reference a file
    """
    if config_path:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Configuration file not found at: {path}")
        return path, "argument"

    default_config = default_config_path()
    if default_config.is_file():
        return default_config, "default"

    return None, "builtin"


def _validate_github_section(github: Any, config_path: Path) -> Dict[str, Optional[str]]:
    if not isinstance(github, dict):
        raise ConfigError(
            f"'github' section in {config_path} must be a mapping\n"
            f"Required format:\n"
            f"github:\n"
            f"  repo: OWNER/REPO"
        )

    unknown = set(github) - set(DEFAULT_GITHUB_SETTINGS)
    if unknown:
        logger.warning(f"Ignoring unknown github settings in {config_path}: {', '.join(sorted(unknown))}")

    settings = dict(DEFAULT_GITHUB_SETTINGS)
    for name in DEFAULT_GITHUB_SETTINGS:
        value = github.get(name)
        if value is None:
            continue
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'github.{name}' in {config_path} must be a non-empty string")
        settings[name] = value.strip()

    if settings["app"] and settings["app"] not in SUPPORTED_APPS:
        raise ConfigError(
            f"Unsupported github.app: {settings['app']}\n"
            f"Supported values: {', '.join(SUPPORTED_APPS)}"
        )

    if settings["repo"] and not REPO_PATTERN.match(settings["repo"]):
        raise ConfigError(f"Invalid github.repo '{settings['repo']}': expected OWNER/REPO")

    return settings


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Explicit config file path (optional)

    Returns:
        Dict with keys:
        - github: dict with repo, env, app and gh_path
        - source: where the config came from
        - path: str path of the loaded file, or None

    Raises:
        ConfigError: If the file is missing (explicit path only), unreadable or invalid
    """
    path, source = resolve_config_path(config_path)

    if path is None:
        logger.debug("No config file found, using built-in defaults")
        return {"github": dict(DEFAULT_GITHUB_SETTINGS), "source": source, "path": None}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {path}: {e}")

    if raw is None:
        raw = {}

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must contain a mapping")

    github = _validate_github_section(raw.get("github", {}) or {}, path)

    logger.info(f"Configuration loaded successfully from {path}")
    logger.debug(f"Using repo: {github['repo'] or '(current directory)'}")

    return {"github": github, "source": source, "path": str(path)}
