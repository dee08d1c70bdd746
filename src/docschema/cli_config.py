#!/usr/bin/env python3
"""
Configuration management for docschema.

Supports:
- YAML configuration files
- Environment variable overrides
- Default values
- Validation
"""
from __future__ import annotations

import os
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import yaml

from .config import Config
from .constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SAMPLE_COUNT,
    INFERENCE_MODES,
    MODE_AUTO,
)
from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger(__name__)

COLOR_MODES = ("auto", "always", "never")

_TRUE_VALUES = ("true", "1", "yes", "on")


@dataclass
class DocSchemaSettings:
    """User settings for docschema with defaults."""

    # Firestore settings
    project: Optional[str] = None
    database: Optional[str] = None

    # Inference settings
    default_mode: str = MODE_AUTO
    default_sample_count: int = DEFAULT_SAMPLE_COUNT
    infer_datetimes: bool = False

    # Output settings
    output_dir: str = DEFAULT_OUTPUT_DIR
    color_mode: str = "auto"  # auto, always, never
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "DocSchemaSettings":
        """Load settings from file and environment."""
        settings = cls()

        config_file = config_path or cls.find_config_file()
        if config_file:
            if not Path(config_file).exists():
                raise ConfigurationError(
                    f"Config file not found: {config_file}", config_value=config_file
                )
            settings._load_from_file(config_file)

        # Override with environment variables
        settings._load_from_env()
        settings.validate()
        return settings

    @staticmethod
    def find_config_file() -> Optional[str]:
        """Find config file in standard locations."""
        candidates = [
            "docschema.yml",
            "docschema.yaml",
            ".docschema.yml",
            ".docschema.yaml",
            os.path.expanduser("~/.config/docschema/config.yml"),
            os.path.expanduser("~/.config/docschema/config.yaml"),
        ]

        for candidate in candidates:
            if Path(candidate).exists():
                return candidate
        return None

    def _load_from_file(self, config_path: str) -> None:
        """Load settings from YAML file."""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Error loading config from {config_path}: {e}",
                config_value=config_path,
                cause=e,
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a mapping of settings", config_value=config_path
            )

        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.warning("Ignoring unknown setting %r in %s", key, config_path)

    def _load_from_env(self) -> None:
        """Load settings from environment variables."""
        env_mapping = {
            "DOCSCHEMA_PROJECT": "project",
            "DOCSCHEMA_DATABASE": "database",
            "DOCSCHEMA_MODE": "default_mode",
            "DOCSCHEMA_SAMPLE_COUNT": "default_sample_count",
            "DOCSCHEMA_INFER_DATETIMES": "infer_datetimes",
            "DOCSCHEMA_OUTPUT_DIR": "output_dir",
            "DOCSCHEMA_COLOR": "color_mode",
            "DOCSCHEMA_LOG_LEVEL": "log_level",
        }

        for env_var, attr_name in env_mapping.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            if attr_name == "infer_datetimes":
                value = value.lower() in _TRUE_VALUES
            elif attr_name == "default_sample_count":
                try:
                    value = int(value)
                except ValueError:
                    logger.warning("Ignoring non-integer %s=%r", env_var, value)
                    continue
            setattr(self, attr_name, value)

    def validate(self) -> None:
        """Reject settings the CLI cannot act on."""
        if self.default_mode not in INFERENCE_MODES:
            raise ConfigurationError(
                f"default_mode must be one of {', '.join(INFERENCE_MODES)}, "
                f"got {self.default_mode!r}",
                config_key="default_mode",
            )
        if self.color_mode not in COLOR_MODES:
            raise ConfigurationError(
                f"color_mode must be one of {', '.join(COLOR_MODES)}, got {self.color_mode!r}",
                config_key="color_mode",
            )
        if not isinstance(self.default_sample_count, int) or isinstance(
            self.default_sample_count, bool
        ):
            raise ConfigurationError(
                "default_sample_count must be an integer", config_key="default_sample_count"
            )

    def color_enabled(self) -> bool:
        if self.color_mode == "always":
            return True
        if self.color_mode == "never":
            return False
        return sys.stdout.isatty() and "NO_COLOR" not in os.environ

    def to_config(self, infer_datetimes: Optional[bool] = None) -> Config:
        """Derive the inference ``Config``; explicit arguments win over settings."""
        base = Config()
        return Config(
            infer_datetimes=self.infer_datetimes if infer_datetimes is None else infer_datetimes,
            default_sample_count=base.clamp_sample_count(self.default_sample_count),
            color_enabled=self.color_enabled(),
        )

    def save(self, config_path: str) -> None:
        """Save current settings to file, skipping unset values."""
        data = {k: v for k, v in asdict(self).items() if v is not None}

        Path(config_path).parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)


def add_config_subcommands(subparsers) -> None:
    """Add configuration management subcommands."""

    # docschema config-show
    config_show = subparsers.add_parser(
        "config-show",
        help="Show current configuration",
        description="Display current configuration values from files and environment.",
    )
    config_show.add_argument(
        "--config", metavar="PATH", help="Path to config file (default: auto-discover)"
    )
    config_show.set_defaults(func=cmd_config_show)

    # docschema config-init
    config_init = subparsers.add_parser(
        "config-init",
        help="Initialize configuration file",
        description="Create a new configuration file with default values.",
    )
    config_init.add_argument(
        "config_path",
        nargs="?",
        default="docschema.yml",
        help="Path for new config file",
    )
    config_init.add_argument("--project", help="Default Firestore project")
    config_init.add_argument("--database", help="Default Firestore database")
    config_init.add_argument(
        "--force", action="store_true", help="Overwrite existing config file"
    )
    config_init.set_defaults(func=cmd_config_init)


def cmd_config_show(args) -> int:
    """Handle 'docschema config-show' command."""
    settings = DocSchemaSettings.load(args.config)

    print("Current docschema configuration:")
    print("=" * 40)

    # Group settings by category
    categories = {
        "Firestore": ["project", "database"],
        "Inference": ["default_mode", "default_sample_count", "infer_datetimes"],
        "Output": ["output_dir", "color_mode", "log_level"],
    }

    for category, keys in categories.items():
        print(f"\n{category}:")
        for key in keys:
            value = getattr(settings, key, None)
            if value is None:
                value = "(not set)"
            print(f"  {key}: {value}")

    config_file = args.config or DocSchemaSettings.find_config_file()
    if config_file:
        print(f"\nConfig file: {config_file}")
    else:
        print("\nNo config file found (using defaults)")
    return 0


def cmd_config_init(args) -> int:
    """Handle 'docschema config-init' command."""
    config_path = Path(args.config_path)

    if config_path.exists() and not args.force:
        raise ConfigurationError(
            f"Config file {config_path} already exists. Use --force to overwrite.",
            config_value=str(config_path),
        )

    settings = DocSchemaSettings()
    if args.project:
        settings.project = args.project
    if args.database:
        settings.database = args.database

    settings.save(str(config_path))
    print(f"Created config file: {config_path}")

    print("\nGenerated configuration:")
    print("-" * 30)
    print(config_path.read_text(encoding="utf-8"))
    return 0


__all__ = [
    "DocSchemaSettings",
    "COLOR_MODES",
    "add_config_subcommands",
    "cmd_config_show",
    "cmd_config_init",
]
