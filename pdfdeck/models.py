"""
Core data models for pdfdeck.

Fragments and lines describe what the decoder found on a page; PageDocument
and SlideDescription describe what ends up on a slide. All of them use
Pydantic for validation.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdfdeck.errors import DecodeFragmentError


class TextFragment(BaseModel):
    """One decoded run of text and its position (larger y = higher on page)."""

    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "TextFragment":
        """Coerce a decoder mapping such as ``{"text": ..., "x": ..., "y": ...}``."""
        try:
            text = raw["text"]
            x = float(raw["x"])
            y = float(raw["y"])
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeFragmentError(f"Malformed text fragment: {raw!r}") from e
        if not isinstance(text, str):
            raise DecodeFragmentError(f"Fragment text must be a string: {raw!r}")
        return cls(text=text, x=x, y=y)


class LogicalLine(BaseModel):
    """Fragments judged to sit on the same visual line, left to right."""

    model_config = ConfigDict(frozen=True)

    text: str
    y: Optional[float] = None
    fragments: List[TextFragment] = Field(default_factory=list)


class FallbackKind(str, Enum):
    """Why a page's content had to be substituted."""

    EMPTY_PAGE = "empty_page"
    MISSING_TITLE = "missing_title"
    DECODE_FAILURE = "decode_failure"


class PageDocument(BaseModel):
    """One page's reconstructed title and body."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(ge=1)
    title: str = Field(min_length=1)
    body: str = ""
    raw_text: str = ""
    fallback: Optional[FallbackKind] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v


class SlideRole(str, Enum):
    TITLE_SLIDE = "title_slide"
    CONTENT_SLIDE = "content_slide"


class Geometry(BaseModel):
    """Absolute placeholder position and size, in inches."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class TextStyle(BaseModel):
    """Fully resolved text styling for a placeholder."""

    model_config = ConfigDict(frozen=True)

    font_family: str
    font_size: float = Field(gt=0)
    weight: Literal["regular", "bold"] = "regular"
    color: str = Field(pattern=r"^[0-9A-Fa-f]{6}$")  # RRGGBB, no '#'
    line_spacing: Optional[int] = None  # None = writer default


class Placeholder(BaseModel):
    """A named slide region with its text and resolved style."""

    model_config = ConfigDict(frozen=True)

    name: str
    geometry: Geometry
    align: Literal["left", "center", "right"] = "left"
    vertical_align: Literal["top", "middle", "bottom"] = "top"
    text: Optional[str] = None
    bullets: Optional[List[str]] = None
    style: TextStyle
    bullet: bool = False

    # Writer hints, always passed through
    autofit: bool = False
    wrap: bool = True
    break_line: bool = True


class SlideDescription(BaseModel):
    """Everything a presentation writer needs to draw one slide."""

    model_config = ConfigDict(frozen=True)

    role: SlideRole
    page_number: int = Field(ge=1)
    placeholders: Dict[str, Placeholder] = Field(default_factory=dict)

    @property
    def title(self) -> Placeholder:
        return self.placeholders["title"]

    @property
    def body(self) -> Optional[Placeholder]:
        return self.placeholders.get("subtitle") or self.placeholders.get("content")

    @property
    def footer(self) -> Optional[Placeholder]:
        return self.placeholders.get("footer")

    def to_dict(self) -> Dict[str, Any]:
        """Export to dict for JSON serialization."""
        return self.model_dump(mode="json", exclude_none=True)


class DocumentMetadata(BaseModel):
    """Information from the PDF's document info dictionary."""

    num_pages: int = Field(ge=0)
    title: str = "Untitled"
    author: str = "Unknown"
    subject: str = ""
    creator: str = ""
    producer: str = ""
    creation_date: Optional[str] = None
