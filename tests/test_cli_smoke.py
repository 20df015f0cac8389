from __future__ import annotations

import shutil
from pathlib import Path

import orjson
import pytest

from metacheck.check import check_distribution
from metacheck.cli import main
from metacheck.report.render import render_json

_FIXTURE = Path(__file__).parent / "fixtures" / "Foo-Bar-1.23"


def _copy_fixture(tmp_path: Path) -> Path:
    root = tmp_path / "Foo-Bar-1.23"
    shutil.copytree(_FIXTURE, root)
    return root


def test_cli_check_conformant_fixture(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)

    exit_code = main(["check", str(root)])

    assert exit_code == 0
    payload = orjson.loads(capsys.readouterr().out)
    assert payload["conformant"] is True
    assert payload["status"] == "complete"
    assert payload["artifact"] == {"name": "Foo-Bar", "version": "1.23"}


def test_cli_check_violation_exits_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)
    (root / "LICENSE").unlink()

    exit_code = main(["check", str(root)])

    assert exit_code == 1
    payload = orjson.loads(capsys.readouterr().out)
    license_rule = payload["rules"]["LicensePlacement"]
    assert license_rule["status"] == "failed"
    assert [v["location"] for v in license_rule["violations"]] == ["license-file"]


def test_cli_check_missing_metadata_exits_two(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)
    (root / "META.json").unlink()
    (root / "META.yml").unlink()

    exit_code = main(["check", str(root)])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "MissingMetadata" in captured.err


def test_cli_check_invalid_config_exits_two(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)
    config_path = tmp_path / "metacheck.toml"
    config_path.write_text("bogus_key = 1", encoding="utf-8")

    exit_code = main(["check", str(root), "--config", str(config_path)])

    assert exit_code == 2
    assert "config error" in capsys.readouterr().err


def test_cli_check_output_file_and_text_format(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)
    out_path = tmp_path / "report.txt"

    exit_code = main(["check", str(root), "--format", "text", "--output", str(out_path)])

    assert exit_code == 0
    assert capsys.readouterr().out == ""
    text = out_path.read_text(encoding="utf-8")
    assert text.startswith("Foo-Bar 1.23\n")
    assert "VersionConsistency: ok" in text
    assert "ArchiveNaming: skipped" in text


def test_cli_check_with_lineage_and_usage(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)
    lineage = tmp_path / "lineage.txt"
    lineage.write_text("# released\n1.20\n1.22\n", encoding="utf-8")
    usage = tmp_path / "usage.txt"
    usage.write_text("JSON::PP 2.27\nTry::Tiny\n", encoding="utf-8")

    exit_code = main(
        ["check", str(root), "--lineage", str(lineage), "--usage", str(usage)]
    )

    assert exit_code == 1
    rules = orjson.loads(capsys.readouterr().out)["rules"]
    assert rules["VersionMonotonic"]["status"] == "passed"
    assert rules["VersionWidthStable"]["status"] == "passed"
    assert [v["location"] for v in rules["DependencyCompleteness"]["violations"]] == [
        "Try::Tiny"
    ]


def test_cli_check_archive_name_for_directory(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)

    exit_code = main(["check", str(root), "--archive-name", "Foo-Bar-1.23.tar.gz"])

    assert exit_code == 0
    rules = orjson.loads(capsys.readouterr().out)["rules"]
    assert rules["ArchiveNaming"]["status"] == "passed"


def test_cli_bad_lineage_exits_two(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)
    lineage = tmp_path / "lineage.txt"
    lineage.write_text("1.20\nnot-a-version\n", encoding="utf-8")

    exit_code = main(["check", str(root), "--lineage", str(lineage)])

    assert exit_code == 2
    assert "lineage.txt:2" in capsys.readouterr().err


def test_cli_verify_roundtrip(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = _copy_fixture(tmp_path)
    report_path = tmp_path / "report.json"

    assert main(["check", str(root), "--output", str(report_path)]) == 0
    assert main(["verify", str(root), "--report", str(report_path)]) == 0
    assert capsys.readouterr().err == ""


def test_cli_verify_detects_drift(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)
    report_path = tmp_path / "report.json"
    assert main(["check", str(root), "--output", str(report_path)]) == 0

    (root / "LICENSE").unlink()
    exit_code = main(["verify", str(root), "--report", str(report_path)])

    assert exit_code == 1
    assert "regenerated" in capsys.readouterr().err


def test_cli_verify_missing_report_exits_two(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path)
    report_path = tmp_path / "missing.json"

    exit_code = main(["verify", str(root), "--report", str(report_path)])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"report: {report_path}" in captured.err
    assert "does not exist" in captured.err


def test_cli_check_output_file_holds_rendered_json(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path)
    out_path = tmp_path / "report.json"

    exit_code = main(["check", str(root), "--output", str(out_path)])

    assert exit_code == 0
    assert out_path.read_bytes() == render_json(check_distribution(root))
