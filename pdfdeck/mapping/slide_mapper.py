"""
Map a classified page onto the profile's slide templates.

The first page becomes the title slide (title + subtitle), every other page a
content slide (title + content). Bodies whose lines start with bullet markers
are turned into bullet lists. Geometry and fonts are resolved here so the
writer never has to consult the profile.
"""

import math
import re
from typing import Dict, List, Optional

from pdfdeck.config import FontSpec, PlaceholderTemplate, StyleProfile
from pdfdeck.errors import ConfigurationError
from pdfdeck.models import (
    Geometry,
    PageDocument,
    Placeholder,
    SlideDescription,
    SlideRole,
    TextStyle,
)

BULLET_LINE = re.compile(r"^[•\-*]\s", re.MULTILINE)
BULLET_PREFIX = re.compile(r"^[•\-*]\s*")

BODY_PLACEHOLDER = {
    SlideRole.TITLE_SLIDE: "subtitle",
    SlideRole.CONTENT_SLIDE: "content",
}


def slide_role(page_index: int) -> SlideRole:
    return SlideRole.TITLE_SLIDE if page_index == 0 else SlideRole.CONTENT_SLIDE


def has_bullet_points(text: str) -> bool:
    """True if any line starts with a bullet marker followed by whitespace."""
    return bool(BULLET_LINE.search(text))


def split_bullets(text: str) -> List[str]:
    """One item per non-empty line, with a single leading marker removed."""
    items = []
    for line in text.split("\n"):
        item = BULLET_PREFIX.sub("", line, count=1).strip()
        if item:
            items.append(item)
    return items


def normalize_color(color: str) -> str:
    """``#2C5F2D`` -> ``2C5F2D``"""
    return color[1:] if color.startswith("#") else color


def line_spacing_value(line_height: Optional[float]) -> Optional[int]:
    """
    Convert a line-height multiplier into the writer's spacing value.

    1.4 -> 40 (140%), 1.0 -> 0. None means "use the writer default".
    """
    if line_height is None:
        return None
    return math.floor((line_height - 1) * 100 + 0.5)


def _template(profile: StyleProfile, role: SlideRole, name: str) -> PlaceholderTemplate:
    templates = profile.conversion.slide_templates
    if role.value not in templates:
        raise ConfigurationError([f"conversion.slide_templates.{role.value} is missing"])
    if name not in templates[role.value]:
        raise ConfigurationError([f"conversion.slide_templates.{role.value}.{name} is missing"])
    return templates[role.value][name]


def _font(profile: StyleProfile, font_role: str) -> FontSpec:
    fonts = profile.design.fonts
    if font_role not in fonts:
        raise ConfigurationError([f"design.fonts.{font_role} is missing"])
    return fonts[font_role]


def _style(font: FontSpec) -> TextStyle:
    return TextStyle(
        font_family=font.family,
        font_size=font.size,
        weight="bold" if font.bold else "regular",
        color=normalize_color(font.color),
        line_spacing=line_spacing_value(font.line_height),
    )


def _placeholder(name: str, template: PlaceholderTemplate, style: TextStyle, **content) -> Placeholder:
    return Placeholder(
        name=name,
        geometry=Geometry(
            x=template.x, y=template.y, width=template.width, height=template.height
        ),
        align=template.align,
        vertical_align=template.valign,
        style=style,
        **content,
    )


def _footer(profile: StyleProfile) -> Optional[Placeholder]:
    footer = profile.branding.footer
    if footer is None or not footer.enabled:
        return None

    body_font = profile.design.fonts.get("body")
    return Placeholder(
        name="footer",
        geometry=Geometry(
            x=footer.position.x,
            y=footer.position.y,
            width=footer.width,
            height=footer.height,
        ),
        align="left",
        vertical_align="top",
        text=footer.text,
        style=TextStyle(
            font_family=body_font.family if body_font else "Arial",
            font_size=footer.font_size,
            color=normalize_color(footer.color),
        ),
    )


def map_to_slide(page: PageDocument, page_index: int, profile: StyleProfile) -> SlideDescription:
    """
    Build the slide description for one page.

    Args:
        page: Classified page content
        page_index: 0-based position in the deck (0 = title slide)
        profile: Style profile to resolve geometry and fonts from

    Raises:
        ConfigurationError: a template or font entry this slide needs is
            missing. The error carries ``page.page_number``.
    """
    role = slide_role(page_index)
    try:
        placeholders: Dict[str, Placeholder] = {}

        placeholders["title"] = _placeholder(
            "title",
            _template(profile, role, "title"),
            _style(_font(profile, "title")),
            text=page.title,
        )

        if page.body:
            name = BODY_PLACEHOLDER[role]
            template = _template(profile, role, name)
            style = _style(_font(profile, "body"))
            if has_bullet_points(page.body):
                placeholders[name] = _placeholder(
                    name, template, style, bullets=split_bullets(page.body), bullet=True
                )
            else:
                placeholders[name] = _placeholder(name, template, style, text=page.body)

        footer = _footer(profile)
        if footer is not None:
            placeholders["footer"] = footer
    except ConfigurationError as e:
        raise e.for_page(page.page_number) from e

    return SlideDescription(role=role, page_number=page.page_number, placeholders=placeholders)
