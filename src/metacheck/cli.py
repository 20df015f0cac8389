"""Command-line interface for metacheck."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from metacheck.check import check_distribution
from metacheck.logging import configure_logging, get_logger
from metacheck.report.render import render, write_report
from metacheck.rules.config import ConfigError, MetacheckConfig, load_config
from metacheck.scan.errors import LoadError
from metacheck.scan.inputs import load_lineage, load_usage
from metacheck.verify.verify import verify_report

logger = get_logger("cli")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        msg = f"expected a positive integer, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        msg = f"expected a positive number, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _add_common_inputs(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Distribution directory or release archive (default: .)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config file (default: metacheck.toml in the distribution)",
    )
    parser.add_argument(
        "--lineage",
        default=None,
        help="File listing previously released versions, oldest first",
    )
    parser.add_argument(
        "--usage",
        default=None,
        help="File listing modules the distribution uses",
    )
    parser.add_argument(
        "--archive-name",
        default=None,
        help="Archive file name the directory was unpacked from",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Whole-run timeout in seconds (default: config timeout_seconds)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Rule worker threads (default: config max_workers)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metacheck",
        description="Check a distribution's packaging metadata for conformance",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Check a distribution")
    _add_common_inputs(check_parser)
    check_parser.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="Report format (default: json)",
    )
    check_parser.add_argument(
        "--output",
        default=None,
        help="Write the report to this file instead of stdout",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify a stored JSON report is reproduced byte for byte"
    )
    _add_common_inputs(verify_parser)
    verify_parser.add_argument(
        "--report",
        required=True,
        help="Stored JSON report to compare against",
    )

    return parser


def _resolve_config(root: Path, args: argparse.Namespace) -> MetacheckConfig:
    config_path = Path(args.config).expanduser().resolve() if args.config else None
    config = load_config(root, config_path)

    overrides: dict[str, object] = {}
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    if overrides:
        config = config.model_copy(update=overrides)
    return config


def _check_options(root: Path, args: argparse.Namespace) -> dict[str, object]:
    config = _resolve_config(root, args)
    lineage = None
    if args.lineage is not None:
        lineage = load_lineage(
            Path(args.lineage).expanduser(), width=config.version_group_width
        )
    usage = None
    if args.usage is not None:
        usage = load_usage(Path(args.usage).expanduser())
    return {
        "config": config,
        "lineage": lineage,
        "usage": usage,
        "archive_name": args.archive_name,
    }


def _handle_check(root: Path, args: argparse.Namespace) -> int:
    report = check_distribution(root, **_check_options(root, args))

    if args.output is not None:
        write_report(Path(args.output).expanduser(), report, args.format)
    else:
        sys.stdout.write(render(report, args.format).decode("utf-8"))

    logger.info(
        "%s %s: %d violation(s), %s",
        report.artifact.name,
        report.artifact.version,
        report.violation_count,
        report.status,
    )
    return 0 if report.conformant else 1


def _handle_verify(root: Path, args: argparse.Namespace) -> int:
    report_path = Path(args.report).expanduser().resolve()
    try:
        result = verify_report(
            root=root, report_path=report_path, **_check_options(root, args)
        )
    except (FileNotFoundError, IsADirectoryError) as exc:
        sys.stderr.write(f"report: {report_path}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for line in result.diff:
            sys.stderr.write(f"{line}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(verbose=args.verbose, log_file=log_file)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "check":
            return _handle_check(root, args)

        if args.command == "verify":
            return _handle_verify(root, args)
    except LoadError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
