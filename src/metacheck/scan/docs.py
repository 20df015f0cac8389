"""Section extraction from README and POD documentation."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

_MARKDOWN_HEADING_RE = re.compile(r"^#{1,6}\s+(?P<title>.+?)\s*#*\s*$")
_POD_HEADING_RE = re.compile(r"^=head[1-4]\s+(?P<title>.+?)\s*$")
_PLAIN_HEADING_RE = re.compile(r"^(?P<title>[A-Z][A-Z0-9 &/,'-]*[A-Z0-9])\s*$")

_POD_SUFFIXES = frozenset({".pod", ".pm", ".pl"})
_MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


def normalize_title(title: str) -> str:
    """Uppercase a heading and collapse whitespace for comparisons."""
    return " ".join(title.replace("`", "").split()).upper()


def _detect_style(path: str, text: str) -> str:
    suffix = PurePosixPath(path).suffix.lower()
    if suffix in _POD_SUFFIXES:
        return "pod"
    if suffix in _MARKDOWN_SUFFIXES:
        return "markdown"
    if re.search(r"^=head[1-4]\s", text, re.MULTILINE):
        return "pod"
    if re.search(r"^#{1,6}\s", text, re.MULTILINE):
        return "markdown"
    return "plain"


def _split_sections(lines: list[str], heading_re: re.Pattern[str], *, pod: bool) -> dict[str, str]:
    sections: dict[str, str] = {}
    title: str | None = None
    body: list[str] = []
    in_pod = not pod
    in_fence = False

    def _close() -> None:
        if title is not None and title not in sections:
            sections[title] = "\n".join(body).strip()

    for line in lines:
        if line.startswith("```"):
            in_fence = not in_fence
        if in_fence or line.startswith("```"):
            if title is not None:
                body.append(line)
            continue
        if pod:
            if line.startswith("=cut"):
                _close()
                title = None
                body = []
                in_pod = False
                continue
            if line.startswith("="):
                in_pod = True
        if not in_pod:
            continue

        match = heading_re.match(line)
        if match is not None:
            _close()
            title = normalize_title(match.group("title"))
            body = []
            continue
        if pod and line.startswith("=") and not line.startswith("=item"):
            continue
        if title is not None:
            body.append(line)

    _close()
    return sections


def extract_sections(path: str, text: str) -> dict[str, str]:
    """Return normalized section title -> body text for one document.

    The first occurrence of a title wins. Markdown headings, POD ``=headN``
    commands and plain-text all-caps headings (pod2text output) are read.
    """
    lines = text.splitlines()
    style = _detect_style(path, text)
    if style == "pod":
        return _split_sections(lines, _POD_HEADING_RE, pod=True)
    if style == "markdown":
        return _split_sections(lines, _MARKDOWN_HEADING_RE, pod=False)
    return _split_sections(lines, _PLAIN_HEADING_RE, pod=False)


__all__ = ["extract_sections", "normalize_title"]
