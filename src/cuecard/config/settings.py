"""cuecard configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from cuecard.exceptions import ConfigurationError, check_config_keys

DEFAULT_STOP_WORDS = [
    "IL",
    "LO",
    "LA",
    "I",
    "GLI",
    "LE",
    "UN",
    "UNA",
    "UNO",
    "E",
    "O",
    "MA",
    "SE",
    "PERCHÉ",
    "QUINDI",
    "COSÌ",
    "ALLORA",
    "ATTO",
    "SCENA",
    "FINE",
    "INIZIO",
    "SIPARIO",
    "ENTRA",
    "ESCE",
    "ACT",
    "SCENE",
]

DEFAULT_FALLBACK_TITLE = "Copione Importato"
DEFAULT_SCENE_NAME = "Scena 1"

# Longer phrases first so "Entra in scena" is reported over "Entra"
DEFAULT_DIRECTION_VERBS = [
    "Entra in scena",
    "Esce di scena",
    "Entra",
    "Esce",
    "Si alza",
    "Si siede",
    "Enter",
    "Exit",
    "Exeunt",
    "Stands",
    "Sits",
]


class CueCardSettings(BaseSettings):
    """cuecard configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. Explicit overrides passed by the caller
    2. Config file values (YAML, TOML, or JSON), later files win
    3. Environment variables (prefixed with CUECARD_)
       Example: export CUECARD_MIN_SPEAKER_MENTIONS=3
    4. .env file in the current directory
    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="CUECARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    # Speaker detection
    min_speaker_mentions: int = Field(
        default=2,
        description="Minimum number of cues before a name counts as a character",
        ge=1,
    )
    stop_words: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_STOP_WORDS),
        description="Words never accepted as character names (case-insensitive)",
    )
    direction_verbs: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_DIRECTION_VERBS),
        description="Line openings that mark a stage direction (case-insensitive)",
    )

    # Title and scene naming
    title_scan_lines: int = Field(
        default=10,
        description="Number of leading lines inspected for a title",
        ge=1,
    )
    title_max_length: int = Field(
        default=60,
        description="Title candidates must be shorter than this",
        ge=1,
    )
    fallback_title: str = Field(
        default=DEFAULT_FALLBACK_TITLE,
        description="Title used when nothing better can be inferred",
        min_length=1,
    )
    default_scene_name: str = Field(
        default=DEFAULT_SCENE_NAME,
        description="Name of the implicit scene open before any marker",
        min_length=1,
    )

    # Acquisition
    max_input_bytes: int = Field(
        default=3 * 1024 * 1024,  # 3 MiB
        description="Maximum size of imported text in UTF-8 bytes",
        gt=0,
    )

    # Playback
    direction_prefix: str = Field(
        default="Direzione: ",
        description="Prefix spoken before stage directions during rehearsal",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and ~ in the log file path."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be str or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("stop_words", "direction_verbs", mode="before")
    @classmethod
    def split_word_list(cls, v: Any) -> Any:
        """Accept comma-separated strings as well as lists.

        Environment variables arrive as plain strings, e.g.
        ``CUECARD_STOP_WORDS="IL,LA,FINE"``.
        """
        if isinstance(v, str):
            stripped = v.strip()
            if stripped.startswith("["):
                return json.loads(stripped)
            return [item.strip() for item in stripped.split(",") if item.strip()]
        return v

    @classmethod
    def from_env(cls) -> CueCardSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> CueCardSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> CueCardSettings:
        """Load settings with proper precedence from multiple sources.

        Args:
            config_files: Config files to load (later files override earlier).
            env_file: Path to .env file (default: .env in current directory).
            overrides: Explicit values, applied last. None values are ignored.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        for config_file in config_files or []:
            try:
                file_settings = cls.from_file(config_file)
            except FileNotFoundError:
                from cuecard.config.logging import get_logger as _get_logger

                _get_logger("cuecard.config.settings").warning(
                    "Configuration file not found, using defaults",
                    config_file=str(config_file),
                )
                continue
            # Only keep values the file actually set so env vars still apply
            data.update(file_settings.model_dump(exclude_unset=True))

        if env_file:
            settings = cls(_env_file=env_file, **data)  # type: ignore[call-arg]
        else:
            settings = cls(**data)

        if overrides:
            override_data = {k: v for k, v in overrides.items() if v is not None}
            if override_data:
                merged = settings.model_dump()
                merged.update(override_data)
                settings = cls(**merged)

        return settings


# Global settings instance
_settings: CueCardSettings | None = None


def _get_config_paths() -> list[Path | str]:
    """Get the config files that exist, in priority order (later wins)."""
    potential_paths = [
        Path.home() / ".config" / "cuecard" / "config.yaml",
        Path.home() / ".config" / "cuecard" / "config.json",
        Path.home() / ".config" / "cuecard" / "config.toml",
        Path.cwd() / "cuecard.yaml",
        Path.cwd() / "cuecard.json",
        Path.cwd() / "cuecard.toml",
    ]

    existing_paths: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue
    return existing_paths


def get_settings() -> CueCardSettings:
    """Get the global settings instance.

    Returns:
        Global CueCardSettings instance, loaded on first use.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = CueCardSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = CueCardSettings.from_env()
    return _settings


def set_settings(settings: CueCardSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the global settings instance.

    Forces recreation of settings on next call to get_settings(),
    useful for tests that modify environment variables.
    """
    global _settings
    _settings = None
