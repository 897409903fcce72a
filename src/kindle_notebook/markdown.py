"""Markdown rendering for extracted notebook highlights."""
from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional

ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/*<>:|?"]')

HIGHLIGHTS_HEADING = "\n\n## Highlights \n\n"
SEPARATOR = "---\n\n"
MISSING_VALUE = "N/A"


def sanitise_title(value: str) -> str:
    """Return ``value`` without the characters that are illegal in file names."""

    return ILLEGAL_FILENAME_CHARS.sub("", value)


def format_front_matter(metadata: Mapping[str, Any]) -> str:
    """Render ``metadata`` as a ``---`` fenced block of ``key: value`` lines.

    Strings are written double-quoted exactly as given, so values such as
    ``[[Jane Doe]]`` survive as wiki links. Other scalars are written bare.
    """

    def format_scalar(value: Any) -> str:
        if isinstance(value, str):
            return f'"{value}"'
        return str(value)

    lines: List[str] = ["---"]
    for key, value in metadata.items():
        lines.append(f"{key}: {format_scalar(value)}")
    lines.append("---")
    return "\n".join(lines) + "\n"


def render_chapter(title: str) -> str:
    return f"# {title}\n\n"


def render_highlight(text: str, page: Optional[str], position: Optional[str]) -> str:
    return (
        f"> {text}\n"
        f"- Page: {page or MISSING_VALUE}, Position: {position or MISSING_VALUE}\n\n"
    )


def render_annotation(note: str) -> str:
    # Trailing space before the blank line is part of the callout format.
    return f">[!{note}] \n\n"


def render_document(author: str, highlight_count: int, body: str) -> str:
    """Compose the final note: frontmatter, highlights heading, then ``body``."""

    front_matter = format_front_matter(
        {
            "author": f"[[{author}]]",
            "highlights": highlight_count,
        }
    )
    return front_matter + HIGHLIGHTS_HEADING + body
