"""metacheck: conformance checks for distribution packaging metadata."""

__version__ = "0.1.0"


def __getattr__(name: str) -> object:
    if name == "check_distribution":
        from metacheck.check import check_distribution

        return check_distribution

    if name in {"LoadError", "LoadErrorKind", "load_artifact"}:
        from metacheck.scan import LoadError, LoadErrorKind, load_artifact

        return {
            "LoadError": LoadError,
            "LoadErrorKind": LoadErrorKind,
            "load_artifact": load_artifact,
        }[name]

    if name in {"Report", "build_report", "render_json", "render_text"}:
        from metacheck.report import Report, build_report, render_json, render_text

        return {
            "Report": Report,
            "build_report": build_report,
            "render_json": render_json,
            "render_text": render_text,
        }[name]

    if name in {"VersionSpec", "parse_version"}:
        from metacheck.versions import VersionSpec, parse_version

        return {"VersionSpec": VersionSpec, "parse_version": parse_version}[name]

    msg = f"module 'metacheck' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "LoadError",
    "LoadErrorKind",
    "Report",
    "VersionSpec",
    "__version__",
    "build_report",
    "check_distribution",
    "load_artifact",
    "parse_version",
    "render_json",
    "render_text",
]
