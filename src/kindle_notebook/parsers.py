"""Parsers that turn a Kindle notebook HTML export into a Markdown note."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from .markdown import (
    SEPARATOR,
    render_annotation,
    render_chapter,
    render_highlight,
    sanitise_title,
)
from .models import (
    NOTE_HEADING_CLASS,
    NOTE_TEXT_CLASS,
    SECTION_HEADING_CLASS,
    EntryKind,
    ExtractionResult,
    MarkerEntry,
)

logger = logging.getLogger(__name__)

TITLE_CLASS = "bookTitle"
AUTHOR_CLASS = "authors"

PAGE_PATTERN = re.compile(r"(Page|Página) (\d+)", re.ASCII)
POSITION_PATTERN = re.compile(r"Posición (\d+)|Position (\d+)", re.ASCII)
TRIM_PATTERN = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")

# Highlight text, then the user note heading and its text.
LOOKAHEAD = 3


def _classes(element: Tag) -> frozenset:
    value = element.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return frozenset(value)


def trim(value: str) -> str:
    """Strip surrounding whitespace, including byte order marks."""

    return TRIM_PATTERN.sub("", value)


def _class_text(soup: BeautifulSoup, class_name: str) -> str:
    # Every matching element contributes, the way a class selector's text does.
    return "".join(element.get_text() for element in soup.find_all(class_=class_name))


def _entry(element: Tag, following: Tuple[MarkerEntry, ...] = ()) -> MarkerEntry:
    classes = _classes(element)
    return MarkerEntry(
        kind=EntryKind.from_classes(classes),
        classes=classes,
        text=element.get_text(),
        span_count=len(element.find_all("span", recursive=False)),
        following=following,
    )


def scan_entries(soup: BeautifulSoup) -> List[MarkerEntry]:
    """Return one entry per section or note heading, in document order.

    Each entry carries the element siblings that follow it, up to the
    furthest offset the walk looks at.
    """

    entries: List[MarkerEntry] = []
    for heading in soup.find_all(class_=[SECTION_HEADING_CLASS, NOTE_HEADING_CLASS]):
        siblings = heading.find_next_siblings(True, limit=LOOKAHEAD)
        entries.append(_entry(heading, tuple(_entry(sibling) for sibling in siblings)))
    return entries


def _note_text(entry: Optional[MarkerEntry]) -> str:
    if entry is None or not entry.has_class(NOTE_TEXT_CLASS):
        return ""
    return trim(entry.text)


def find_page(text: str) -> Optional[str]:
    match = PAGE_PATTERN.search(text)
    return match.group(2) if match else None


def find_position(text: str) -> Optional[str]:
    match = POSITION_PATTERN.search(text)
    if not match:
        return None
    return match.group(1) or match.group(2)


def has_annotation(entry: MarkerEntry) -> bool:
    """Whether the note heading ``entry`` is followed by a user note.

    The sibling two places ahead (past the highlight text) must exist, hold
    no ``span`` children and not open a new section.
    """

    candidate = entry.peek(2)
    if candidate is None:
        return False
    return candidate.span_count == 0 and not candidate.has_class(SECTION_HEADING_CLASS)


def render_entries(entries: Sequence[MarkerEntry]) -> tuple[str, int]:
    """Walk ``entries`` and return the rendered body and the highlight count."""

    body: List[str] = []
    highlights_counter = 0

    for entry in entries:
        if entry.kind is EntryKind.SECTION_HEADING:
            chapter_title = trim(entry.text)
            if chapter_title:
                body.append(render_chapter(chapter_title))
            continue

        if entry.kind is not EntryKind.NOTE_HEADING:
            continue

        if entry.span_count != 1:
            logger.debug(
                "Skipping note heading with %d span children: %r",
                entry.span_count,
                trim(entry.text),
            )
            continue

        page = find_page(entry.text)
        position = find_position(entry.text)
        highlight_text = _note_text(entry.peek(1))
        body.append(render_highlight(highlight_text, page, position))

        if has_annotation(entry):
            body.append(render_annotation(_note_text(entry.peek(3))))

        body.append(SEPARATOR)
        highlights_counter += 1

    return "".join(body), highlights_counter


def extract(html: str) -> ExtractionResult:
    """Extract the title, author and formatted highlights from ``html``.

    Missing title or author elements yield empty strings; malformed note
    headings are skipped. This never raises for string input.
    """

    soup = BeautifulSoup(html, "html.parser")
    title = sanitise_title(trim(_class_text(soup, TITLE_CLASS)))
    # Only the title is sanitised; the author keeps its characters as exported.
    author = trim(_class_text(soup, AUTHOR_CLASS))

    body, count = render_entries(scan_entries(soup))
    logger.debug("Extracted %d highlight(s) from %r", count, title)
    return ExtractionResult(title=title, author=author, highlight_count=count, body=body)


class NotebookHtmlParser:
    """Parses the HTML notebook exported from a Kindle."""

    def parse(self, path: Path) -> ExtractionResult:
        html = path.expanduser().resolve().read_text(encoding="utf-8-sig")
        return extract(html)
