from __future__ import annotations

from pathlib import Path

import pytest

from metacheck.rules.config import ConfigError, MetacheckConfig, load_config


def _write_config(dist_root: Path, toml_content: str) -> None:
    (dist_root / "metacheck.toml").write_text(toml_content, encoding="utf-8")


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "version_group_width = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_unknown_rule_name_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'disabled_rules = ["NoSuchRule"]')

    with pytest.raises(ConfigError, match="NoSuchRule"):
        load_config(tmp_path)


def test_unknown_license_location_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'required_license_locations = ["somewhere"]')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_extension_without_dot_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'archive_extensions = ["tar.gz"]')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_positive_width_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "version_group_width = 0")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
version_group_width = 2
required_license_locations = ["metadata-json", "documentation"]
disabled_rules = ["ShebangPortability"]
timeout_seconds = 5.5
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.version_group_width == 2
    assert config.required_license_locations == ["metadata-json", "documentation"]
    assert config.disabled_rules == ["ShebangPortability"]
    assert config.timeout_seconds == 5.5


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config == MetacheckConfig()
    assert config.version_group_width == 3
    assert config.interpreter == "perl"


def test_missing_default_config_uses_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path) == MetacheckConfig()


def test_archive_input_uses_defaults(tmp_path: Path) -> None:
    archive = tmp_path / "Foo-Bar-1.23.tar.gz"
    archive.write_bytes(b"")

    assert load_config(archive) == MetacheckConfig()


def test_explicit_missing_config_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path, tmp_path / "elsewhere.toml")


def test_explicit_config_path_read(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.toml"
    config_path.write_text('interpreter = "perl5"', encoding="utf-8")

    assert load_config(tmp_path / "dist", config_path).interpreter == "perl5"
