"""Data models for Kindle notebook extraction."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .markdown import render_document

SECTION_HEADING_CLASS = "sectionHeading"
NOTE_HEADING_CLASS = "noteHeading"
NOTE_TEXT_CLASS = "noteText"


class EntryKind(Enum):
    SECTION_HEADING = "section_heading"
    NOTE_HEADING = "note_heading"
    NOTE_TEXT = "note_text"
    OTHER = "other"

    @classmethod
    def from_classes(cls, classes: FrozenSet[str]) -> "EntryKind":
        # A section heading wins when an element carries both heading markers.
        if SECTION_HEADING_CLASS in classes:
            return cls.SECTION_HEADING
        if NOTE_HEADING_CLASS in classes:
            return cls.NOTE_HEADING
        if NOTE_TEXT_CLASS in classes:
            return cls.NOTE_TEXT
        return cls.OTHER


@dataclass(frozen=True)
class MarkerEntry:
    """One element of the notebook export.

    Headings also carry the element siblings that directly follow them, so
    the note text and any attached user note can be looked up by offset.
    """

    kind: EntryKind
    classes: FrozenSet[str]
    text: str
    span_count: int
    following: Tuple["MarkerEntry", ...] = ()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def peek(self, offset: int) -> Optional["MarkerEntry"]:
        """Return the sibling ``offset`` places after this entry, if any."""

        if offset < 1 or offset > len(self.following):
            return None
        return self.following[offset - 1]


@dataclass
class ExtractionResult:
    """Title, author, highlight count and rendered body of one notebook."""

    title: str
    author: str
    highlight_count: int
    body: str

    def render(self) -> str:
        return render_document(self.author, self.highlight_count, self.body)
