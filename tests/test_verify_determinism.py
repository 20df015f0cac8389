from __future__ import annotations

import shutil
import tarfile
from pathlib import Path

import pytest

from metacheck.check import check_distribution
from metacheck.report.render import render_json, write_report
from metacheck.verify.verify import DeterminismResult, verify_report

_FIXTURE = Path(__file__).parent / "fixtures" / "Foo-Bar-1.23"


def _copy_fixture(tmp_path: Path) -> Path:
    root = tmp_path / "Foo-Bar-1.23"
    shutil.copytree(_FIXTURE, root)
    return root


def test_repeated_checks_render_identical_bytes(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)

    first = render_json(check_distribution(root))
    second = render_json(check_distribution(root))

    assert first == second


def test_verify_report_matches_fresh_check(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)
    report_path = tmp_path / "report.json"
    write_report(report_path, check_distribution(root, lineage=["1.20", "1.22"]))

    result = verify_report(root=root, report_path=report_path, lineage=["1.20", "1.22"])

    assert result == DeterminismResult(ok=True)


def test_verify_report_detects_changed_inputs(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)
    report_path = tmp_path / "report.json"
    write_report(report_path, check_distribution(root))

    result = verify_report(root=root, report_path=report_path, lineage=["1.30"])

    assert result.ok is False
    assert any(line.startswith("+") and "VersionNotIncreasing" in line for line in result.diff)


def test_verify_report_missing_file(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)

    with pytest.raises(FileNotFoundError):
        verify_report(root=root, report_path=tmp_path / "missing.json")


def test_verify_report_rejects_directory(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)

    with pytest.raises(IsADirectoryError):
        verify_report(root=root, report_path=tmp_path)


def test_archive_and_directory_agree(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)
    archive = tmp_path / "Foo-Bar-1.23.tar.gz"
    with tarfile.open(archive, "w:gz") as tar:
        tar.add(root, arcname="Foo-Bar-1.23")

    from_archive = check_distribution(archive)
    from_directory = check_distribution(root, archive_name="Foo-Bar-1.23.tar.gz")

    assert render_json(from_archive) == render_json(from_directory)
    assert from_archive.conformant is True


def test_config_kept_in_distribution_root_does_not_break_conformance(
    tmp_path: Path,
) -> None:
    root = _copy_fixture(tmp_path)
    (root / "metacheck.toml").write_text("max_workers = 2\n", encoding="utf-8")

    report = check_distribution(root)

    assert report.conformant is True
    assert report.rules["ManifestConsistency"].violations == []
