"""
pdfdeck: Convert text-based PDFs into template-styled, editable PPTX.

Recovers reading order from positioned text fragments, splits each page into
title and body, and lays the result out on the slide templates of a YAML
style profile.
"""

__version__ = "0.1.0"
__author__ = "pdfdeck Team"

from pdfdeck.config import StyleProfile, default_profile, load_profile
from pdfdeck.errors import ConfigurationError, DecodeFragmentError, EmptyPageWarning
from pdfdeck.layout import classify_page, reconstruct_lines
from pdfdeck.mapping import map_to_slide
from pdfdeck.models import LogicalLine, PageDocument, SlideDescription, TextFragment
from pdfdeck.pipeline import DeckPipeline

__all__ = [
    "ConfigurationError",
    "DecodeFragmentError",
    "DeckPipeline",
    "EmptyPageWarning",
    "LogicalLine",
    "PageDocument",
    "SlideDescription",
    "StyleProfile",
    "TextFragment",
    "classify_page",
    "default_profile",
    "load_profile",
    "map_to_slide",
    "reconstruct_lines",
]
