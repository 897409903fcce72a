"""Utilities for importing Kindle notebook exports into Markdown notes."""

from .config import ImportConfig
from .models import ExtractionResult
from .parsers import NotebookHtmlParser, extract

__all__ = ["ImportConfig", "ExtractionResult", "NotebookHtmlParser", "extract"]
