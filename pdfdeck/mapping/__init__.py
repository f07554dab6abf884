"""
Slide mapping: turn classified pages into writer-ready slide descriptions.
"""

from pdfdeck.mapping.slide_mapper import (
    has_bullet_points,
    line_spacing_value,
    map_to_slide,
    normalize_color,
    split_bullets,
)

__all__ = [
    "has_bullet_points",
    "line_spacing_value",
    "map_to_slide",
    "normalize_color",
    "split_bullets",
]
