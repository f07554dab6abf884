"""
Split a page's lines into title and body.

The first line is the title. Every substitute title or body text comes from
FALLBACKS so that empty pages, blank titles and unreadable pages all read the
same way on the slide.
"""

from typing import Dict, Sequence

from pdfdeck.layout.lines import lines_to_text
from pdfdeck.models import FallbackKind, LogicalLine, PageDocument

FALLBACKS: Dict[FallbackKind, Dict[str, str]] = {
    FallbackKind.EMPTY_PAGE: {"title": "Page {n}", "body": ""},
    FallbackKind.MISSING_TITLE: {"title": "Page {n}", "body": ""},
    FallbackKind.DECODE_FAILURE: {"title": "Page {n}", "body": "[Page {n} could not be read]"},
}


def fallback_title(kind: FallbackKind, page_number: int) -> str:
    return FALLBACKS[kind]["title"].format(n=page_number)


def fallback_page(kind: FallbackKind, page_number: int) -> PageDocument:
    """Placeholder page for ``kind``."""
    entry = FALLBACKS[kind]
    return PageDocument(
        page_number=page_number,
        title=entry["title"].format(n=page_number),
        body=entry["body"].format(n=page_number),
        fallback=kind,
    )


def classify_page(lines: Sequence[LogicalLine], page_number: int) -> PageDocument:
    """First line becomes the title, the rest the newline-joined body."""
    if not lines:
        return fallback_page(FallbackKind.EMPTY_PAGE, page_number)

    title = lines[0].text.strip()
    body = lines_to_text(lines[1:])
    fallback = None
    if not title:
        fallback = FallbackKind.MISSING_TITLE
        title = fallback_title(fallback, page_number)

    return PageDocument(
        page_number=page_number,
        title=title,
        body=body,
        raw_text=lines_to_text(lines),
        fallback=fallback,
    )
