"""
Text fragment extraction with PyMuPDF.

Every text span on a page becomes one fragment positioned at its baseline
origin. PyMuPDF measures y downward from the top of the page, so y is flipped
against the page height to get "larger y = higher on page".
"""

from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import fitz  # PyMuPDF

from pdfdeck.errors import DecodeFragmentError
from pdfdeck.extractors.base import BaseExtractor
from pdfdeck.models import DocumentMetadata, TextFragment


def _suppress_mupdf_noise() -> None:
    """Turn off MuPDF's stderr warnings where the installed version allows it."""
    tools = getattr(fitz, "TOOLS", None)
    if tools is None:
        return
    for name in ("mupdf_display_errors", "mupdf_display_warnings"):
        fn = getattr(tools, name, None)
        if callable(fn):
            fn(False)


def iter_raw_spans(page_dict: Dict[str, Any], page_height: float) -> Iterator[Dict[str, Any]]:
    """Yield ``{"text", "x", "y"}`` mappings for the text spans of a page dict."""
    for block in page_dict.get("blocks", []):
        if block.get("type") != 0:  # 0 = text, 1 = image
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                origin = span.get("origin") or span.get("bbox")
                if not origin:
                    yield {"text": span.get("text")}
                    continue
                yield {
                    "text": span.get("text"),
                    "x": origin[0],
                    "y": page_height - origin[1],
                }


class PyMuPDFExtractor(BaseExtractor):
    """Decode positioned text fragments from text-based PDFs."""

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        self.doc = None
        self.name = "pymupdf"

    def load(self, pdf_path: Path) -> DocumentMetadata:
        pdf_path = Path(pdf_path)
        _suppress_mupdf_noise()
        self.close()

        try:
            self.doc = fitz.open(pdf_path)
        except Exception as e:
            raise RuntimeError(f"Failed to open PDF: {pdf_path}") from e

        info = self.doc.metadata or {}
        metadata = DocumentMetadata(
            num_pages=self.doc.page_count,
            title=info.get("title") or "Untitled",
            author=info.get("author") or "Unknown",
            subject=info.get("subject") or "",
            creator=info.get("creator") or "",
            producer=info.get("producer") or "",
            creation_date=info.get("creationDate") or None,
        )
        print(f"[PyMuPDF] Loaded {pdf_path.name}: {metadata.num_pages} pages")
        return metadata

    def extract_page(self, page_number: int) -> List[TextFragment]:
        if self.doc is None:
            raise RuntimeError("No PDF loaded")

        page = self.doc.load_page(page_number - 1)
        page_dict = page.get_text("dict")

        fragments = []
        skipped = 0
        for raw in iter_raw_spans(page_dict, page.rect.height):
            try:
                fragments.append(TextFragment.from_raw(raw))
            except DecodeFragmentError:
                skipped += 1

        if skipped:
            print(f"[PyMuPDF] Page {page_number}: skipped {skipped} malformed fragments")
        return fragments

    def close(self) -> None:
        if self.doc is not None:
            self.doc.close()
            self.doc = None
