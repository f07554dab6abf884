"""
Page layout analysis: line reconstruction and title/body classification.
"""

from pdfdeck.layout.classifier import FALLBACKS, classify_page, fallback_page
from pdfdeck.layout.lines import lines_to_text, reconstruct_lines

__all__ = [
    "FALLBACKS",
    "classify_page",
    "fallback_page",
    "lines_to_text",
    "reconstruct_lines",
]
