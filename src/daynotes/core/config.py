"""Application configuration management.

Handles loading and validating configuration from multiple sources:
    - TOML/JSON config files
    - Environment variables (NOTES_* prefix)
    - Default values

Key components:
    - AppConfig: Main configuration model
    - load_config(): Safe config loading with fallback
    - ConfigLoadResult: Metadata about config source
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from unittest.mock import patch

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from daynotes.core.dates import CalendarDate
from daynotes.core.result import ConfigurationError, ParseError
from daynotes.core.sections import (
    DEFAULT_CARRYOVER,
    DEFAULT_DONE_MARKER,
    DEFAULT_HEADER_MARKER,
    DEFAULT_NONCARRYOVER,
    SectionCatalog,
)

CONFIG_ENV_VAR = "DAYNOTES_CONFIG"


# -----------------------------------------------------------------------------
# Sub-configuration Models
# -----------------------------------------------------------------------------


class DailyConfig(BaseModel):
    """Daily note store and carryover behaviour."""

    notes_dir: Path = Field(
        default_factory=lambda: Path.home() / "daily_notes",
        description="Root of the <YYYY>/<MM>/<YYYY-MM-DD>.txt tree.",
    )
    template: Path = Field(
        default_factory=lambda: Path.home() / ".daily_note_template",
        description="Optional daily note template; built-in layout when missing.",
    )
    carryover_sections: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CARRYOVER),
        description="Sections copied forward into the next note, done items excluded.",
    )
    noncarryover_sections: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NONCARRYOVER),
        description="Sections that start empty in every new note.",
    )
    header_marker: str = Field(default=DEFAULT_HEADER_MARKER, description="Section header prefix.")
    done_marker: str = Field(
        default=DEFAULT_DONE_MARKER, description="Trailing marker of a finished item."
    )
    scan_horizon: str = Field(
        default="1970-01-01", description="Oldest date considered when looking for a prior note."
    )
    archive_dir: Path = Field(
        default_factory=Path.cwd, description="Where archive-year writes its tar.gz."
    )

    @field_validator("notes_dir", "template", "archive_dir", mode="after")
    @classmethod
    def expand_paths(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("scan_horizon", mode="after")
    @classmethod
    def validate_horizon(cls, v: str) -> str:
        try:
            return CalendarDate.parse(v).isoformat()
        except ParseError as exc:
            raise ValueError(str(exc)) from exc

    def horizon(self) -> CalendarDate:
        return CalendarDate.parse(self.scan_horizon)

    def section_catalog(self) -> SectionCatalog:
        return SectionCatalog.from_names(
            self.carryover_sections,
            self.noncarryover_sections,
            header_marker=self.header_marker,
            done_marker=self.done_marker,
        )


class GeneralConfig(BaseModel):
    """General (titled) note store."""

    notes_dir: Path = Field(default_factory=lambda: Path.home() / "notes")
    template: Path = Field(
        default_factory=lambda: Path.home() / ".general_note_template",
        description="Optional general note template ({{TITLE}}, {{DATE}}, {{TAGS}}).",
    )

    @field_validator("notes_dir", "template", mode="after")
    @classmethod
    def expand_paths(cls, v: Path) -> Path:
        return v.expanduser()


class UserConfig(BaseModel):
    """User preferences."""

    editor: str = Field(
        default_factory=lambda: os.environ.get("EDITOR") or "vim",
        description="Editor command used to open notes.",
    )
    log_level: str = Field(default="WARNING", description="Log level for notes output.")


@dataclass
class ConfigLoadResult:
    path: Path
    file_loaded: bool
    env_overrides: set[str]
    error: str | None = None


class AppConfig(BaseSettings):
    """Application-wide configuration with nested sub-configs."""

    model_config = SettingsConfigDict(
        env_prefix="NOTES_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    daily: DailyConfig = Field(default_factory=DailyConfig)
    general: GeneralConfig = Field(default_factory=GeneralConfig)
    user: UserConfig = Field(default_factory=UserConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        # Ensure environment variables override config file entries.
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


def _resolve_config_path(config_path: Path | None, env_vars: Mapping[str, str]) -> Path:
    candidate = config_path or env_vars.get(CONFIG_ENV_VAR) or (Path.home() / ".notesconfig")
    return Path(candidate).expanduser()


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    raw = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    parser = json.loads if suffix == ".json" else tomllib.loads

    try:
        data = parser(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Syntax error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root in {path} must be a mapping.")

    return data


def _detect_env_overrides(env_vars: Mapping[str, str]) -> set[str]:
    """Detect which fields are overridden by environment variables.

    For nested models, detects vars like NOTES_DAILY__NOTES_DIR, NOTES_USER__EDITOR.
    """
    prefix = AppConfig.model_config.get("env_prefix", "")
    delimiter = AppConfig.model_config.get("env_nested_delimiter", "__")
    overrides: set[str] = set()

    nested_models: dict[str, type[BaseModel]] = {
        "daily": DailyConfig,
        "general": GeneralConfig,
        "user": UserConfig,
    }

    for group_name, model_cls in nested_models.items():
        for field in model_cls.model_fields:
            env_key = f"{prefix}{group_name}{delimiter}{field}".upper()
            if env_key in env_vars:
                overrides.add(f"{group_name}.{field}")

    return overrides


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> tuple[AppConfig, ConfigLoadResult]:
    """
    Load configuration with Safe Mode fallback.
    If the file is invalid, returns default config + error message.
    """
    env_vars: Mapping[str, str] = os.environ if env is None else {**os.environ, **env}
    resolved_path = _resolve_config_path(config_path, env_vars)
    env_overrides = _detect_env_overrides(env_vars)

    error: str | None = None
    file_loaded = False
    file_data: dict[str, Any] = {}

    try:
        file_data = _read_config_file(resolved_path)
        file_loaded = resolved_path.exists()
    except ConfigurationError as exc:
        error = str(exc)

    context_manager = (
        patch.dict(os.environ, env_vars, clear=False) if env is not None else nullcontext()
    )

    try:
        with context_manager:
            config = AppConfig(**file_data)
    except ValidationError as exc:
        error = str(exc)
        config = AppConfig()

    load_result = ConfigLoadResult(
        path=resolved_path,
        file_loaded=file_loaded,
        env_overrides=env_overrides,
        error=error,
    )

    return config, load_result
