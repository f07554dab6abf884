"""
Base extractor interface.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from pdfdeck.models import DocumentMetadata, TextFragment


class BaseExtractor(ABC):
    """Abstract base class for PDF text decoders."""

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}
        self.name = self.__class__.__name__.replace("Extractor", "").lower()

    @abstractmethod
    def load(self, pdf_path: Path) -> DocumentMetadata:
        """
        Open a PDF and read its document information.

        Args:
            pdf_path: Path to the input PDF file

        Returns:
            DocumentMetadata with the page count
        """

    @abstractmethod
    def extract_page(self, page_number: int) -> List[TextFragment]:
        """
        Decode the text fragments of one page of the loaded PDF.

        Args:
            page_number: Page number (1-indexed)

        Returns:
            Fragments in decoder order, y increasing upward
        """

    def close(self) -> None:
        """Release the loaded document."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
