"""
Main orchestration pipeline for pdfdeck.

Coordinates fragment extraction, line reconstruction, page classification,
slide mapping and PPTX generation.
"""

import json
import warnings
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from pdfdeck.config import StyleProfile, default_profile
from pdfdeck.errors import EmptyPageWarning
from pdfdeck.extractors import BaseExtractor, PyMuPDFExtractor
from pdfdeck.layout import classify_page, fallback_page, reconstruct_lines
from pdfdeck.mapping import map_to_slide
from pdfdeck.models import FallbackKind, PageDocument, SlideDescription, TextFragment
from pdfdeck.renderers import PPTXRenderer

ProgressCallback = Callable[[float, str], None]
ErrorCallback = Callable[[Exception], None]


def build_page(
    fragments: Iterable[Any], page_number: int, tolerance: float
) -> PageDocument:
    """Reconstruct lines for one page and classify them."""
    lines = reconstruct_lines(fragments, tolerance=tolerance)
    if not lines:
        warnings.warn(f"Page {page_number} has no extractable text", EmptyPageWarning)
    return classify_page(lines, page_number)


def build_pages(
    fragment_pages: Sequence[Iterable[Any]], tolerance: float
) -> List[PageDocument]:
    """Build PageDocuments for already-decoded pages (page numbers start at 1)."""
    return [
        build_page(fragments, page_number, tolerance)
        for page_number, fragments in enumerate(fragment_pages, start=1)
    ]


def build_slides(pages: Sequence[PageDocument], profile: StyleProfile) -> List[SlideDescription]:
    """Map pages to slides. A ConfigurationError stops the whole deck."""
    return [map_to_slide(page, index, profile) for index, page in enumerate(pages)]


class DeckPipeline:
    """
    End-to-end pipeline for converting text PDFs to template-styled PPTX.

    Pipeline stages:
    1. Extraction: decode positioned text fragments per page (PyMuPDF)
    2. Layout: rebuild reading-order lines, split title and body
    3. Mapping: place title/body/footer on the profile's slide templates
    4. PPTX Rendering: generate an editable PowerPoint
    """

    def __init__(
        self,
        profile: Optional[StyleProfile] = None,
        save_intermediate: bool = True,
        extractor: Optional[BaseExtractor] = None,
    ):
        """
        Initialize pipeline.

        Args:
            profile: Style profile (default: built-in profile)
            save_intermediate: Save the classified pages as JSON
            extractor: Fragment decoder (default: PyMuPDFExtractor)
        """
        self._profile = profile or default_profile()
        self.save_intermediate = save_intermediate

        self.extractor = extractor or PyMuPDFExtractor()

    @property
    def profile(self) -> StyleProfile:
        return self._profile

    def update_profile(self, profile: Union[StyleProfile, Dict[str, Any]]) -> StyleProfile:
        """
        Replace the style profile.

        A mapping is merged over the current profile into a new one. Runs
        already in progress keep the profile they started with.
        """
        if not isinstance(profile, StyleProfile):
            profile = self._profile.merged(profile)
        self._profile = profile
        return profile

    def process(
        self,
        pdf_path: Path,
        output_dir: Optional[Path] = None,
        progress_callback: Optional[ProgressCallback] = None,
        error_callback: Optional[ErrorCallback] = None,
    ) -> dict:
        """
        Process a PDF through the full pipeline.

        Args:
            pdf_path: Path to input PDF file
            output_dir: Output directory (default: ./output/<pdf_name>)
            progress_callback: Called with (percent, message)
            error_callback: Called with the exception before a failed run re-raises it

        Returns:
            Dictionary with:
            {
                "pptx": Path to PPTX file,
                "pages": Path to pages JSON (if enabled),
                "metadata": DocumentMetadata of the PDF
            }
        """
        try:
            return self._run(pdf_path, output_dir, progress_callback)
        except Exception as e:
            if error_callback:
                error_callback(e)
            raise

    def _run(
        self,
        pdf_path: Path,
        output_dir: Optional[Path],
        progress_callback: Optional[ProgressCallback],
    ) -> dict:
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        if output_dir is None:
            output_dir = Path("output") / pdf_path.stem
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        profile = self._profile
        report = _Progress(progress_callback)

        print(f"\n{'='*60}")
        print("pdfdeck Pipeline")
        print(f"{'='*60}")
        print(f"Input: {pdf_path}")
        print(f"Output: {output_dir}")
        print(f"Template: {profile.template.name}")
        print(f"{'='*60}\n")

        report(0.0, "Reading PDF")
        with self.extractor as extractor:
            report(10.0, "Parsing PDF")
            metadata = extractor.load(pdf_path)
            print(f"[Stage 1/3] {metadata.num_pages} pages, title: {metadata.title}")

            report(20.0, "Analyzing pages")
            pages = self._extract_pages(extractor, metadata.num_pages, profile.line_tolerance, report)

        pages_path = None
        if self.save_intermediate:
            pages_path = output_dir / f"{pdf_path.stem}.pages.json"
            save_pages(pages, pages_path)
            print(f"[Stage 2/3] Saved pages to {pages_path}")

        report(85.0, "Generating PowerPoint")
        print("\n[Stage 3/3] Rendering PPTX")
        slides = build_slides(pages, profile)
        pptx_path = output_dir / f"{pdf_path.stem}_converted.pptx"
        PPTXRenderer(profile.design.layout).render(slides, pptx_path)

        report(100.0, "Conversion complete")
        print(f"\n{'='*60}")
        print("✓ Pipeline Complete")
        print(f"{'='*60}")
        print(f"PPTX: {pptx_path}")
        if pages_path:
            print(f"Pages JSON: {pages_path}")
        print(f"{'='*60}\n")

        return {
            "pptx": pptx_path,
            "pages": pages_path,
            "metadata": metadata,
        }

    def _extract_pages(
        self,
        extractor: BaseExtractor,
        num_pages: int,
        tolerance: float,
        report: "_Progress",
    ) -> List[PageDocument]:
        print(f"\n[Stage 2/3] Analyzing {num_pages} pages")
        pages = []
        for page_number in range(1, num_pages + 1):
            try:
                fragments: List[TextFragment] = extractor.extract_page(page_number)
                page = build_page(fragments, page_number, tolerance)
            except Exception as e:
                print(f"[Stage 2/3] Error on page {page_number}: {e}")
                page = fallback_page(FallbackKind.DECODE_FAILURE, page_number)
            pages.append(page)

            print(f"  → Page {page_number}/{num_pages}: {page.title[:60]}")
            report(
                20.0 + (page_number / num_pages) * 60.0,
                f"Analyzing page {page_number}/{num_pages}",
            )
        return pages

    @classmethod
    def from_pages(
        cls,
        pages_path: Path,
        output_dir: Optional[Path] = None,
        profile: Optional[StyleProfile] = None,
    ) -> dict:
        """
        Re-render a deck from a saved pages JSON.

        Useful for trying another style profile without re-reading the PDF.
        """
        pages_path = Path(pages_path)
        if not pages_path.exists():
            raise FileNotFoundError(f"Pages JSON not found: {pages_path}")

        pages = load_pages(pages_path)
        profile = profile or default_profile()

        if output_dir is None:
            output_dir = pages_path.parent
        output_dir = Path(output_dir)

        stem = pages_path.name.replace(".pages.json", "")
        print(f"[Pipeline] Re-rendering {len(pages)} pages from {pages_path}")
        slides = build_slides(pages, profile)
        pptx_path = output_dir / f"{stem}_converted.pptx"
        PPTXRenderer(profile.design.layout).render(slides, pptx_path)

        return {"pptx": pptx_path, "pages": pages_path}


class _Progress:
    def __init__(self, callback: Optional[ProgressCallback]):
        self.callback = callback

    def __call__(self, percent: float, message: str) -> None:
        if self.callback:
            self.callback(round(percent), message)
        print(f"[{round(percent)}%] {message}")


def save_pages(pages: Sequence[PageDocument], path: Path) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(
            [page.model_dump(mode="json") for page in pages],
            f,
            indent=2,
            ensure_ascii=False,
        )
    return path


def load_pages(path: Path) -> List[PageDocument]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return [PageDocument.model_validate(item) for item in data]
