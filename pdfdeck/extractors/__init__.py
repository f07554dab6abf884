"""
Extraction engines that decode PDF pages into positioned text fragments.
"""

from pdfdeck.extractors.base import BaseExtractor
from pdfdeck.extractors.pymupdf_extractor import PyMuPDFExtractor

__all__ = ["BaseExtractor", "PyMuPDFExtractor"]
