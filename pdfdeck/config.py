"""
Style profile: fonts, colors, slide templates and branding.

Profiles are immutable. Changing the configuration means building a new
profile (``StyleProfile.merged``) and handing that to the pipeline.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pdfdeck.errors import ConfigurationError

HEX_COLOR = r"^#?[0-9A-Fa-f]{6}$"

DEFAULT_LINE_TOLERANCE = 5.0


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ThemeConfig(_Frozen):
    primary_color: str = Field(default="#2C5F2D", pattern=HEX_COLOR)
    secondary_color: str = Field(default="#97BC62", pattern=HEX_COLOR)
    background_color: str = Field(default="#FFFFFF", pattern=HEX_COLOR)


class FontSpec(_Frozen):
    """Font attributes for one text role (title or body)."""

    family: str = "Arial"
    size: float = Field(default=18, gt=0)
    bold: bool = False
    color: str = Field(default="#333333", pattern=HEX_COLOR)
    line_height: Optional[float] = Field(default=None, gt=0)


class Margin(_Frozen):
    top: float = 0.5
    left: float = 0.5
    right: float = 0.5
    bottom: float = 0.5


class LayoutConfig(_Frozen):
    slide_width: float = Field(default=10.0, gt=0)
    slide_height: float = Field(default=7.5, gt=0)
    margin: Margin = Field(default_factory=Margin)


class DesignConfig(_Frozen):
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    fonts: Dict[str, FontSpec] = Field(default_factory=dict)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)


class PlaceholderTemplate(_Frozen):
    """Where a placeholder sits on the slide, in inches."""

    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    align: Literal["left", "center", "right"] = "left"
    valign: Literal["top", "middle", "bottom"] = "top"


class ConversionConfig(_Frozen):
    slide_templates: Dict[str, Dict[str, PlaceholderTemplate]] = Field(default_factory=dict)
    line_tolerance: float = Field(default=DEFAULT_LINE_TOLERANCE, ge=0, allow_inf_nan=False)


class FooterPosition(_Frozen):
    x: float = 0.5
    y: float = 7.0


class FooterConfig(_Frozen):
    enabled: bool = False
    text: str = ""
    position: FooterPosition = Field(default_factory=FooterPosition)
    width: float = Field(default=9.0, gt=0)
    height: float = Field(default=0.4, gt=0)
    font_size: float = Field(default=10, gt=0)
    color: str = Field(default="#97BC62", pattern=HEX_COLOR)


class BrandingConfig(_Frozen):
    footer: Optional[FooterConfig] = None


class TemplateInfo(_Frozen):
    name: str = "Default Template"


class StyleProfile(_Frozen):
    """
    The declarative layout/style configuration.

    Slide templates and fonts are plain mappings so that a profile missing
    an entry still loads; the slide mapper reports the gap when a slide
    actually needs it.
    """

    template: TemplateInfo = Field(default_factory=TemplateInfo)
    design: DesignConfig = Field(default_factory=DesignConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    branding: BrandingConfig = Field(default_factory=BrandingConfig)

    @property
    def line_tolerance(self) -> float:
        return self.conversion.line_tolerance

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StyleProfile":
        """Validate a raw mapping, reporting problems as ConfigurationError."""
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            issues = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationError(issues) from e

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)

    def merged(self, overrides: Dict[str, Any]) -> "StyleProfile":
        """Return a new profile with ``overrides`` deep-merged over this one."""
        return StyleProfile.from_dict(_deep_merge(self.to_dict(), overrides))


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


DEFAULT_PROFILE_DATA: Dict[str, Any] = {
    "template": {"name": "Default Template"},
    "design": {
        "theme": {
            "primary_color": "#2C5F2D",
            "secondary_color": "#97BC62",
            "background_color": "#FFFFFF",
        },
        "fonts": {
            "title": {"family": "Arial", "size": 32, "bold": True, "color": "#2C5F2D"},
            "body": {"family": "Arial", "size": 18, "bold": False, "color": "#333333"},
        },
        "layout": {
            "slide_width": 10,
            "slide_height": 7.5,
            "margin": {"top": 0.5, "left": 0.5, "right": 0.5, "bottom": 0.5},
        },
    },
    "conversion": {
        "slide_templates": {
            "title_slide": {
                "title": {"x": 0.5, "y": 2.5, "width": 9.0, "height": 1.5,
                          "align": "center", "valign": "middle"},
                "subtitle": {"x": 0.5, "y": 4.2, "width": 9.0, "height": 0.8,
                             "align": "center", "valign": "top"},
            },
            "content_slide": {
                "title": {"x": 0.5, "y": 0.5, "width": 9.0, "height": 0.8,
                          "align": "left", "valign": "middle"},
                "content": {"x": 0.5, "y": 1.5, "width": 9.0, "height": 5.5,
                            "align": "left", "valign": "top"},
            },
        },
        "line_tolerance": DEFAULT_LINE_TOLERANCE,
    },
    "branding": {
        "footer": {
            "enabled": True,
            "text": "FABRIC TOKYO",
            "position": {"x": 0.5, "y": 7.0},
            "font_size": 10,
            "color": "#97BC62",
        }
    },
}


def default_profile() -> StyleProfile:
    """Built-in profile used when no YAML file is given."""
    return StyleProfile.from_dict(DEFAULT_PROFILE_DATA)


def load_profile(path: Path) -> StyleProfile:
    """Load and validate a YAML style profile."""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError([f"Config file not found: {path}"])

    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError([f"Could not parse {path}: {e}"]) from e

    if raw is not None and not isinstance(raw, dict):
        raise ConfigurationError([f"{path}: top level must be a mapping"])

    return StyleProfile.from_dict(raw or {})


def describe_profile(profile: StyleProfile) -> Dict[str, Any]:
    """Summary of a profile for display (template, theme, fonts, layout)."""
    title_font = profile.design.fonts.get("title")
    return {
        "template": profile.template.name,
        "primary_color": profile.design.theme.primary_color,
        "secondary_color": profile.design.theme.secondary_color,
        "title_font": title_font.family if title_font else None,
        "layout": {
            "slide_width": profile.design.layout.slide_width,
            "slide_height": profile.design.layout.slide_height,
        },
        "fonts": {name: spec.family for name, spec in profile.design.fonts.items()},
        "line_tolerance": profile.line_tolerance,
    }
