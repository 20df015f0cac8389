from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from metacheck.contract.artifacts import LicenseLocation
from metacheck.versions import DEFAULT_GROUP_WIDTH

CONFIG_FILENAME = "metacheck.toml"


class MetacheckConfig(BaseModel):
    """Settings for a conformance check run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version_group_width: int = Field(
        default=DEFAULT_GROUP_WIDTH,
        ge=1,
        description="Digits per tuple segment when normalizing decimal versions",
    )
    required_license_locations: list[LicenseLocation] = Field(
        default_factory=lambda: ["metadata-json", "metadata-yaml", "license-file"],
        description="Locations where a license must be declared",
    )
    archive_extensions: list[str] = Field(
        default_factory=lambda: [".tar.gz", ".zip", ".tar.bz2", ".tgz"],
        description="Accepted archive file suffixes",
    )
    script_dirs: list[str] = Field(
        default_factory=lambda: ["script", "bin"],
        description="Directories holding installable scripts",
    )
    interpreter: str = Field(
        default="perl",
        description="Interpreter name expected in script shebangs",
    )
    changelog_files: list[str] = Field(
        default_factory=lambda: ["Changes", "CHANGES", "Changes.md", "ChangeLog"],
        description="Changelog candidates, first present wins",
    )
    documentation_globs: list[str] = Field(
        default_factory=lambda: ["README", "README.*", "*.pod", "lib/*.pm", "lib/*.pod"],
        description="Glob patterns for documentation files",
    )
    required_files: list[str] = Field(
        default_factory=lambda: ["MANIFEST", "README*", "Changes*"],
        description="Glob patterns each of which must match a shipped file",
    )
    required_metadata_fields: list[str] = Field(
        default_factory=lambda: [
            "name",
            "version",
            "license",
            "abstract",
            "resources.bugtracker",
        ],
        description="Dotted key paths every metadata document must carry",
    )
    junk_patterns: list[str] = Field(
        default_factory=lambda: [
            ".git/*",
            ".svn/*",
            ".hg/*",
            "blib/*",
            "_build/*",
            "MYMETA.*",
            "pm_to_blib",
            "Makefile",
            "*.bak",
            "*~",
            ".DS_Store",
        ],
        description="Glob patterns for build and VCS leftovers",
    )
    ignored_modules: list[str] = Field(
        default_factory=lambda: [
            "perl",
            "strict",
            "warnings",
            "utf8",
            "lib",
            "vars",
            "constant",
            "base",
            "parent",
            "overload",
        ],
        description="Modules never reported as undeclared dependencies",
    )
    disabled_rules: list[str] = Field(
        default_factory=list,
        description="Rule names to leave out of the run",
    )
    max_workers: int = Field(
        default=4,
        ge=1,
        description="Thread pool size for rule evaluation",
    )
    timeout_seconds: float | None = Field(
        default=30.0,
        gt=0,
        description="Whole-run timeout; None disables it",
    )

    @field_validator("disabled_rules")
    @classmethod
    def validate_disabled_rules(cls, v: list[str]) -> list[str]:
        """Reject rule names that are not in the catalog."""
        from metacheck.rules.catalog import RULE_NAMES

        unknown = sorted(set(v) - set(RULE_NAMES))
        if unknown:
            msg = (
                f"Unknown rule(s) {', '.join(unknown)}. "
                f"Valid rules: {', '.join(RULE_NAMES)}"
            )
            raise ValueError(msg)
        return v

    @field_validator("archive_extensions")
    @classmethod
    def validate_archive_extensions(cls, v: list[str]) -> list[str]:
        for extension in v:
            if not extension.startswith("."):
                msg = f"Archive extension '{extension}' must start with '.'"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path, config_path: Path | None = None) -> MetacheckConfig:
    """Load configuration from metacheck.toml if it exists.

    An explicit config_path must exist; the default file next to a
    distribution directory is optional.
    """
    if config_path is None:
        if not root.is_dir():
            return MetacheckConfig()
        config_path = root / CONFIG_FILENAME
        if not config_path.is_file():
            return MetacheckConfig()
    elif not config_path.is_file():
        msg = f"Config file does not exist: {config_path}"
        raise ConfigError(msg)

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Failed to read {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return MetacheckConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = ["CONFIG_FILENAME", "ConfigError", "MetacheckConfig", "load_config"]
