"""
splice.config - YAML config loading, profile merging, validation.

A project's splice.yaml names a profile. Profiles are either built in or live
under profiles/<name>.yaml and may inherit from another profile; values set
in splice.yaml always win over the profile chain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from splice.exceptions import ConfigError, InvalidFramerateError
from splice.export.edl import SUPPORTED_FORMATS
from splice.export.timecode import parse_integer_framerate
from splice.io import read_text, write_text
from splice.models import AssemblyOptions

CONFIG_FILENAME = "splice.yaml"
PROFILES_DIRNAME = "profiles"


class SpliceConfig(BaseModel):
    """Resolved configuration for a Splice project."""

    project_name: str = "untitled"
    project_profile: str = "rough-cut"

    framerate: int = Field(default=24, gt=0)
    resolution: str = Field(default="1920x1080", pattern=r"^\d+x\d+$")

    strategy: str = "chronological"
    group_by: str | None = None
    add_transitions: bool = False
    semantic_hint_key: str = "sequence"

    default_clip_duration: float = Field(default=5.0, gt=0.0)
    max_transition_duration: float = Field(default=1.0, gt=0.0)
    transition_type: str = "dissolve"

    export_format: str = "CMX3600"

    profile_config_path: Path | None = None

    @field_validator("framerate", mode="before")
    @classmethod
    def validate_framerate(cls, v: Any) -> int:
        try:
            return parse_integer_framerate(v)
        except InvalidFramerateError as e:
            raise ValueError(f"framerate must be a positive whole number, got {v!r}") from e

    @field_validator("group_by", mode="before")
    @classmethod
    def validate_group_by(cls, v: Any) -> Any:
        # null means "inherit from the profile"; false or "none" switches grouping off.
        if v is False or (isinstance(v, str) and v.strip().lower() in ("", "none")):
            return None
        return v

    @field_validator("strategy")
    @classmethod
    def validate_strategy(cls, v: str) -> str:
        valid = {"chronological", "semantic"}
        if v not in valid:
            raise ValueError(f"strategy must be one of: {valid}")
        return v

    @field_validator("export_format")
    @classmethod
    def validate_export_format(cls, v: str) -> str:
        if v.upper() not in SUPPORTED_FORMATS:
            raise ValueError(f"export_format must be one of: {', '.join(SUPPORTED_FORMATS)}")
        return v.upper()

    @field_validator("project_profile", "semantic_hint_key")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    def assembly_options(self, **overrides: Any) -> AssemblyOptions:
        """Build assembly options from config, applying non-None overrides.

        Raises:
            ValidationError: If an override is not a valid option value
        """
        options = {
            "strategy": self.strategy,
            "group_by": self.group_by,
            "add_transitions": self.add_transitions,
            "default_clip_duration": self.default_clip_duration,
            "max_transition_duration": self.max_transition_duration,
            "transition_type": self.transition_type,
        }
        options.update({k: v for k, v in overrides.items() if v is not None})
        return AssemblyOptions.parse(options)


BUILTIN_PROFILES: dict[str, dict[str, Any]] = {
    # One clip after another in shooting order.
    "rough-cut": {
        "strategy": "chronological",
        "group_by": False,
        "add_transitions": False,
        "default_clip_duration": 5.0,
    },
    "scene-cut": {
        "strategy": "chronological",
        "group_by": "scene",
        "add_transitions": True,
        "max_transition_duration": 1.0,
    },
    # Follows the ordering hints of the content-analysis service.
    "story": {
        "strategy": "semantic",
        "group_by": "scene",
        "add_transitions": True,
        "semantic_hint_key": "sequence",
    },
}


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(read_text(path))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def load_profile(name: str, profiles_dir: Path | None = None) -> dict[str, Any]:
    """Load a single profile by name, custom profiles shadowing built-in ones.

    The returned mapping may still carry an ``inherits`` key; see
    resolve_profile() for the flattened form.

    Raises:
        ConfigError: If no profile has that name or its file is malformed
    """
    if profiles_dir is not None:
        profile_file = profiles_dir / f"{name}.yaml"
        if profile_file.exists():
            return _read_yaml(profile_file)
    if name in BUILTIN_PROFILES:
        return dict(BUILTIN_PROFILES[name])
    raise ConfigError(f"Unknown profile: {name}")


def resolve_profile(name: str, profiles_dir: Path | None = None) -> dict[str, Any]:
    """Load a profile and fold in every profile it inherits from.

    Raises:
        ConfigError: If a profile in the chain is unknown or the chain loops
    """
    chain: list[str] = []
    resolved: dict[str, Any] = {}
    while name is not None:
        if name in chain:
            raise ConfigError(f"Profile inheritance loop: {' -> '.join([*chain, name])}")
        chain.append(name)
        profile = load_profile(name, profiles_dir)
        name = profile.pop("inherits", None)
        resolved = merge_config(resolved, profile)
    return resolved


def merge_config(overrides: dict[str, Any], base: dict[str, Any]) -> dict[str, Any]:
    """Lay overrides on top of base. None in overrides leaves the base value.

    To clear a profile value explicitly use its off value instead of null,
    e.g. ``group_by: false``.
    """
    merged = dict(base)
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return merged


def load_config(project_dir: Path) -> SpliceConfig:
    """Load and validate configuration from a project directory.

    Raises:
        ConfigError: If splice.yaml is missing or malformed, its profile
            cannot be resolved, or a value fails validation
    """
    config_file = project_dir / CONFIG_FILENAME
    if not config_file.exists():
        raise ConfigError(f"No {CONFIG_FILENAME} found in {project_dir}")

    raw_config = _read_yaml(config_file)
    profiles_dir = project_dir / PROFILES_DIRNAME
    profile = resolve_profile(
        raw_config.get("project_profile", "rough-cut"),
        profiles_dir if profiles_dir.is_dir() else None,
    )

    merged = merge_config(raw_config, profile)
    merged["profile_config_path"] = config_file

    try:
        return SpliceConfig(**merged)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ConfigError(f"Invalid value for {field} in {config_file}: {error['msg']}") from e


def create_default_config(project_name: str, profile: str = "rough-cut") -> dict[str, Any]:
    """Build the initial splice.yaml contents for a new project."""
    defaults = {
        "project_name": project_name,
        "project_profile": profile,
        "framerate": 24,
        "resolution": "1920x1080",
        "export_format": "CMX3600",
    }
    if profile in BUILTIN_PROFILES:
        defaults = merge_config(defaults, BUILTIN_PROFILES[profile])
    return defaults


def write_config(config: dict[str, Any], path: Path) -> None:
    write_text(path, yaml.safe_dump(config, default_flow_style=False, sort_keys=False))
