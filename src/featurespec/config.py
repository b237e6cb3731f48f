"""Configuration management for featurespec projects."""

from __future__ import annotations

import json
from pathlib import Path

from featurespec.models import ProjectConfig
from featurespec.translator import DIALECTS

FEATURESPEC_DIR = ".featurespec"
CONFIG_FILE = "config.json"


class ConfigError(Exception):
    """Raised when a project config cannot be used."""


def _config_path(project_root: Path) -> Path:
    return project_root / FEATURESPEC_DIR / CONFIG_FILE


def save_config(config: ProjectConfig, project_root: Path) -> Path:
    """Save project config to .featurespec/config.json. Returns the config path."""
    validate_config(config)
    config_dir = project_root / FEATURESPEC_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    path = _config_path(project_root)
    data = {
        "version": config.version,
        "features_dir": config.features_dir,
        "output_dir": config.output_dir,
        "dialect": config.dialect,
    }
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def load_config(project_root: Path) -> ProjectConfig:
    """Load project config from .featurespec/config.json."""
    path = _config_path(project_root)
    if not path.exists():
        raise FileNotFoundError(f"No config found at {path}")
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config format in {path}: expected object")

    defaults = ProjectConfig()
    config = ProjectConfig(
        version=data.get("version", defaults.version),
        features_dir=data.get("features_dir", defaults.features_dir),
        output_dir=data.get("output_dir", defaults.output_dir),
        dialect=data.get("dialect", defaults.dialect),
    )
    validate_config(config)
    return config


def validate_config(config: ProjectConfig) -> None:
    if config.dialect not in DIALECTS:
        known = ", ".join(sorted(DIALECTS))
        raise ConfigError(f"Unknown dialect '{config.dialect}' (expected one of: {known})")
    if not config.features_dir or not config.output_dir:
        raise ConfigError("features_dir and output_dir must be non-empty")
    if Path(config.features_dir) == Path(config.output_dir):
        raise ConfigError("features_dir and output_dir must differ")


def is_initialized(project_root: Path) -> bool:
    """Check if the project has a featurespec config."""
    return _config_path(project_root).exists()


def resolve_config(project_root: Path) -> ProjectConfig:
    """Load the project config, falling back to defaults when there is none."""
    if not is_initialized(project_root):
        return ProjectConfig()
    return load_config(project_root)
