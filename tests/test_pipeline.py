"""
Tests for the end-to-end pipeline, using an in-memory extractor.
"""

import json

import pytest
from pptx import Presentation

from pdfdeck.config import default_profile
from pdfdeck.errors import ConfigurationError, EmptyPageWarning
from pdfdeck.extractors.base import BaseExtractor
from pdfdeck.models import DocumentMetadata, FallbackKind, TextFragment
from pdfdeck.pipeline import DeckPipeline, build_pages, build_slides, load_pages


class FakeExtractor(BaseExtractor):
    """Serves pre-built fragment pages; None marks a page that fails to decode."""

    def __init__(self, pages):
        super().__init__()
        self.pages = pages
        self.closed = False

    def load(self, pdf_path):
        return DocumentMetadata(num_pages=len(self.pages), title="Fake")

    def extract_page(self, page_number):
        fragments = self.pages[page_number - 1]
        if fragments is None:
            raise RuntimeError("corrupt content stream")
        return fragments

    def close(self):
        self.closed = True


def frag(text, x, y):
    return TextFragment(text=text, x=x, y=y)


PAGES = [
    [frag("Quarterly", 0, 700), frag("Review", 90, 701), frag("2024", 0, 650)],
    [frag("- beta", 0, 500), frag("Agenda", 0, 700), frag("- alpha", 0, 600)],
    [],
    None,
]


@pytest.fixture
def pdf_path(tmp_path):
    path = tmp_path / "deck.pdf"
    path.write_bytes(b"%PDF-1.4\n")
    return path


def test_build_pages_and_slides():
    with pytest.warns(EmptyPageWarning):
        pages = build_pages(PAGES[:3], tolerance=5)

    assert [p.title for p in pages] == ["Quarterly Review", "Agenda", "Page 3"]
    assert pages[0].body == "2024"
    assert pages[1].body == "- alpha\n- beta"
    assert pages[2].fallback == FallbackKind.EMPTY_PAGE

    slides = build_slides(pages, default_profile())
    assert slides[0].placeholders["subtitle"].text == "2024"
    assert slides[1].placeholders["content"].bullets == ["alpha", "beta"]
    assert slides[2].body is None


def test_process_writes_pptx_and_pages(pdf_path, tmp_path):
    extractor = FakeExtractor(PAGES)
    progress = []
    pipeline = DeckPipeline(extractor=extractor)

    with pytest.warns(EmptyPageWarning):
        result = pipeline.process(
            pdf_path,
            output_dir=tmp_path / "out",
            progress_callback=lambda percent, message: progress.append(percent),
        )

    assert extractor.closed
    assert result["pptx"] == tmp_path / "out" / "deck_converted.pptx"
    assert result["metadata"].title == "Fake"
    assert len(Presentation(str(result["pptx"])).slides) == 4

    pages = load_pages(result["pages"])
    assert pages[3].fallback == FallbackKind.DECODE_FAILURE
    assert pages[3].body == "[Page 4 could not be read]"

    assert progress[0] == 0
    assert progress[-1] == 100
    assert progress == sorted(progress)
    assert 80 in progress


def test_process_without_intermediate(pdf_path, tmp_path):
    pipeline = DeckPipeline(extractor=FakeExtractor(PAGES[:2]), save_intermediate=False)
    result = pipeline.process(pdf_path, output_dir=tmp_path / "out")
    assert result["pages"] is None
    assert not list((tmp_path / "out").glob("*.json"))


def test_configuration_error_is_fatal(pdf_path, tmp_path):
    data = default_profile().to_dict()
    del data["conversion"]["slide_templates"]["content_slide"]
    profile = type(default_profile()).from_dict(data)
    pipeline = DeckPipeline(profile=profile, extractor=FakeExtractor(PAGES[:2]))

    with pytest.raises(ConfigurationError) as exc_info:
        pipeline.process(pdf_path, output_dir=tmp_path / "out")
    assert exc_info.value.page_number == 2
    assert not (tmp_path / "out" / "deck_converted.pptx").exists()


def test_missing_pdf(tmp_path):
    pipeline = DeckPipeline(extractor=FakeExtractor([]))
    with pytest.raises(FileNotFoundError):
        pipeline.process(tmp_path / "nope.pdf")


def test_update_profile_swaps_reference():
    pipeline = DeckPipeline(extractor=FakeExtractor([]))
    original = pipeline.profile

    updated = pipeline.update_profile({"template": {"name": "New"}})
    assert pipeline.profile is updated
    assert updated.template.name == "New"
    assert original.template.name == "Default Template"

    replacement = default_profile()
    assert pipeline.update_profile(replacement) is replacement


def test_profile_tolerance_is_used(pdf_path, tmp_path):
    pages = [[frag("a", 0, 100), frag("b", 10, 97)]]
    pipeline = DeckPipeline(extractor=FakeExtractor(pages))

    pipeline.update_profile({"conversion": {"line_tolerance": 2}})
    result = pipeline.process(pdf_path, output_dir=tmp_path / "tight")
    assert load_pages(result["pages"])[0].title == "a"

    pipeline.update_profile({"conversion": {"line_tolerance": 5}})
    result = pipeline.process(pdf_path, output_dir=tmp_path / "loose")
    assert load_pages(result["pages"])[0].title == "a b"


def test_from_pages_rerenders(pdf_path, tmp_path):
    pipeline = DeckPipeline(extractor=FakeExtractor(PAGES[:2]))
    result = pipeline.process(pdf_path, output_dir=tmp_path / "out")

    data = json.loads(result["pages"].read_text(encoding="utf-8"))
    assert data[0]["title"] == "Quarterly Review"

    profile = default_profile().merged({"branding": {"footer": {"enabled": False}}})
    rerun = DeckPipeline.from_pages(result["pages"], output_dir=tmp_path / "again", profile=profile)
    prs = Presentation(str(rerun["pptx"]))
    assert len(prs.slides) == 2
    assert "footer" not in {shape.name for shape in prs.slides[0].shapes}


def test_error_callback_receives_failure(pdf_path, tmp_path):
    data = default_profile().to_dict()
    del data["conversion"]["slide_templates"]["title_slide"]
    profile = type(default_profile()).from_dict(data)
    pipeline = DeckPipeline(profile=profile, extractor=FakeExtractor(PAGES[:1]))
    errors = []

    with pytest.raises(ConfigurationError):
        pipeline.process(pdf_path, output_dir=tmp_path / "out", error_callback=errors.append)
    assert len(errors) == 1
    assert isinstance(errors[0], ConfigurationError)
    assert errors[0].page_number == 1


def test_error_callback_not_called_on_success(pdf_path, tmp_path):
    errors = []
    pipeline = DeckPipeline(extractor=FakeExtractor(PAGES[:2]))
    pipeline.process(pdf_path, output_dir=tmp_path / "out", error_callback=errors.append)
    assert errors == []
