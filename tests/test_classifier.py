"""
Tests for title/body classification and the fallback table.
"""

from pdfdeck.layout.classifier import FALLBACKS, classify_page, fallback_page
from pdfdeck.models import FallbackKind, LogicalLine


def lines(*texts):
    return [LogicalLine(text=t) for t in texts]


def test_empty_page_uses_fallback_title():
    page = classify_page([], 4)
    assert page.page_number == 4
    assert page.title == "Page 4"
    assert page.body == ""
    assert page.fallback == FallbackKind.EMPTY_PAGE


def test_single_line_page_has_empty_body():
    page = classify_page(lines("Only line"), 1)
    assert page.title == "Only line"
    assert page.body == ""
    assert page.fallback is None


def test_title_and_body():
    page = classify_page(lines("Title", "Body one", "Body two"), 2)
    assert page.title == "Title"
    assert page.body == "Body one\nBody two"
    assert page.raw_text == "Title\nBody one\nBody two"


def test_blank_first_line_falls_back_but_keeps_body():
    page = classify_page(lines("  ", "Body"), 7)
    assert page.title == "Page 7"
    assert page.body == "Body"
    assert page.fallback == FallbackKind.MISSING_TITLE


def test_classification_is_idempotent():
    source = lines("Title", "- a", "- b")
    assert classify_page(source, 3) == classify_page(source, 3)


def test_decode_failure_fallback():
    page = fallback_page(FallbackKind.DECODE_FAILURE, 5)
    assert page.title == "Page 5"
    assert page.body == "[Page 5 could not be read]"
    assert page.fallback == FallbackKind.DECODE_FAILURE


def test_every_fallback_kind_has_an_entry():
    for kind in FallbackKind:
        assert kind in FALLBACKS
        assert fallback_page(kind, 1).title
