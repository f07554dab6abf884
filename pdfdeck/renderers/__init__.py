"""
PPTX renderers for generating editable PowerPoint files.

Supports python-pptx for deterministic generation.
"""

from pdfdeck.renderers.pptx_renderer import PPTXRenderer

__all__ = ["PPTXRenderer"]
