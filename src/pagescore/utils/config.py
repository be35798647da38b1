"""Tool settings file support for pagescore."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from pagescore.utils.errors import ConfigurationError


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: str = Field(default="terminal", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")
    verbose: bool = Field(default=False, description="Show every audit in terminal output")
    locale: str = Field(default="en", description="Locale used to resolve titles")


class ScoringConfig(BaseModel):
    """Defaults for the score command."""

    config: str | None = Field(default=None, description="Scoring configuration file")
    extends: list[str] = Field(
        default_factory=list,
        description="Override fragments applied on top of the configuration, in order",
    )
    drop_manual: bool = Field(default=False, description="Drop manual audits before scoring")
    only_categories: list[str] | None = Field(default=None, description="Categories to score")
    skip_audits: list[str] | None = Field(default=None, description="Audits to leave out")
    fail_under: float | None = Field(
        default=None,
        ge=0,
        le=1,
        description="Exit non-zero when a scored category falls below this score",
    )


class PageScoreConfig(BaseModel):
    """Main configuration for pagescore."""

    output: OutputConfig = Field(default_factory=OutputConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)


def get_config_paths() -> list[Path]:
    """Get possible settings file paths, in lookup order."""
    paths = [
        Path.cwd() / ".pagescore.yaml",
        Path.cwd() / ".pagescore.yml",
        Path.cwd() / "pagescore.yaml",
    ]

    home = Path.home()
    paths.append(home / ".pagescore.yaml")
    paths.append(home / ".config" / "pagescore" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "pagescore" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> PageScoreConfig:
    """Load settings from file.

    Args:
        config_path: Explicit path to a settings file. If None, searches default locations.

    Returns:
        Loaded settings, or defaults when no file exists

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ConfigurationError: If the file cannot be parsed
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise FileNotFoundError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return PageScoreConfig()


def _load_config_file(path: Path) -> PageScoreConfig:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return PageScoreConfig()
    try:
        return PageScoreConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e


def save_config(config: PageScoreConfig, config_path: Path | str | None = None) -> Path:
    """Save settings to file.

    Args:
        config: Settings to save
        config_path: Path to save to. Defaults to ~/.config/pagescore/config.yaml

    Returns:
        Path where settings were saved
    """
    if config_path is None:
        config_path = Path.home() / ".config" / "pagescore" / "config.yaml"
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


# Global settings instance
_config: PageScoreConfig | None = None


def get_config() -> PageScoreConfig:
    """Get the global settings instance, loading it on first call."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: PageScoreConfig | None) -> None:
    """Set (or with None, reset) the global settings instance."""
    global _config
    _config = config
