"""
Tests for mapping pages onto slide templates.
"""

import pytest

from pdfdeck.config import default_profile
from pdfdeck.errors import ConfigurationError
from pdfdeck.mapping.slide_mapper import (
    has_bullet_points,
    line_spacing_value,
    map_to_slide,
    normalize_color,
    split_bullets,
)
from pdfdeck.models import PageDocument, SlideRole


@pytest.fixture
def profile():
    return default_profile()


def page(title="Title", body="", number=1):
    return PageDocument(page_number=number, title=title, body=body)


def test_first_page_is_title_slide(profile):
    slide = map_to_slide(page(body="Subtitle text"), 0, profile)
    assert slide.role == SlideRole.TITLE_SLIDE
    assert set(slide.placeholders) == {"title", "subtitle", "footer"}
    assert slide.placeholders["subtitle"].text == "Subtitle text"


def test_later_pages_are_content_slides(profile):
    for index in (1, 2, 10):
        slide = map_to_slide(page(body="Body", number=index + 1), index, profile)
        assert slide.role == SlideRole.CONTENT_SLIDE
        assert "content" in slide.placeholders
        assert "subtitle" not in slide.placeholders


def test_role_ignores_content(profile):
    assert map_to_slide(page(title="Page 1"), 0, profile).role == SlideRole.TITLE_SLIDE
    assert map_to_slide(page(body="• a"), 1, profile).role == SlideRole.CONTENT_SLIDE


def test_title_geometry_and_style_from_profile(profile):
    slide = map_to_slide(page(title="Hello"), 1, profile)
    title = slide.title
    assert title.text == "Hello"
    assert (title.geometry.x, title.geometry.y) == (0.5, 0.5)
    assert (title.geometry.width, title.geometry.height) == (9.0, 0.8)
    assert title.align == "left"
    assert title.vertical_align == "middle"
    assert title.style.font_family == "Arial"
    assert title.style.font_size == 32
    assert title.style.weight == "bold"
    assert title.style.color == "2C5F2D"
    assert title.style.line_spacing is None


def test_empty_body_adds_no_body_placeholder(profile):
    slide = map_to_slide(page(), 1, profile)
    assert slide.body is None


def test_bullet_body_becomes_list(profile):
    slide = map_to_slide(page(body="• alpha\n- beta\n* gamma"), 1, profile)
    content = slide.placeholders["content"]
    assert content.bullet is True
    assert content.bullets == ["alpha", "beta", "gamma"]
    assert content.text is None


def test_plain_body_stays_one_block(profile):
    slide = map_to_slide(page(body="line one\nline two"), 1, profile)
    content = slide.placeholders["content"]
    assert content.bullet is False
    assert content.bullets is None
    assert content.text == "line one\nline two"


def test_writer_hints_always_set(profile):
    slide = map_to_slide(page(body="• a"), 0, profile)
    for placeholder in slide.placeholders.values():
        assert placeholder.autofit is False
        assert placeholder.wrap is True
        assert placeholder.break_line is True


def test_has_bullet_points_checks_every_line():
    assert has_bullet_points("Intro\n- item")
    assert has_bullet_points("* item")
    assert not has_bullet_points("-item without space")
    assert not has_bullet_points("Intro - not at line start")


def test_split_bullets_mixed_lines():
    text = "Intro\n• one\n\n-   two  \n--double"
    assert split_bullets(text) == ["Intro", "one", "two", "-double"]


def test_normalize_color():
    assert normalize_color("#2C5F2D") == "2C5F2D"
    assert normalize_color("97BC62") == "97BC62"


def test_line_spacing_value():
    assert line_spacing_value(1.4) == 40
    assert line_spacing_value(1.0) == 0
    assert line_spacing_value(1.6) == 60
    assert line_spacing_value(1.125) == 13
    assert line_spacing_value(1.625) == 63
    assert line_spacing_value(None) is None


def test_line_height_flows_into_style(profile):
    profile = profile.merged({"design": {"fonts": {"body": {"line_height": 1.4}}}})
    slide = map_to_slide(page(body="Body"), 1, profile)
    assert slide.placeholders["content"].style.line_spacing == 40


def test_footer_comes_from_profile(profile):
    slide = map_to_slide(page(), 3, profile)
    footer = slide.footer
    assert footer.text == "FABRIC TOKYO"
    assert (footer.geometry.x, footer.geometry.y) == (0.5, 7.0)
    assert footer.style.font_size == 10
    assert footer.style.color == "97BC62"


def test_disabled_or_missing_footer(profile):
    disabled = profile.merged({"branding": {"footer": {"enabled": False}}})
    assert map_to_slide(page(), 1, disabled).footer is None

    data = profile.to_dict()
    data["branding"] = {}
    no_footer = type(profile).from_dict(data)
    assert map_to_slide(page(), 1, no_footer).footer is None


def test_missing_template_raises_with_page_number(profile):
    data = profile.to_dict()
    del data["conversion"]["slide_templates"]["title_slide"]
    broken = type(profile).from_dict(data)

    with pytest.raises(ConfigurationError) as exc_info:
        map_to_slide(page(number=1), 0, broken)
    assert exc_info.value.page_number == 1
    assert "title_slide" in str(exc_info.value)

    # Content slides don't need the title slide template
    assert map_to_slide(page(number=2), 1, broken).role == SlideRole.CONTENT_SLIDE


def test_missing_body_template_only_fails_when_body_present(profile):
    data = profile.to_dict()
    del data["conversion"]["slide_templates"]["content_slide"]["content"]
    broken = type(profile).from_dict(data)

    assert map_to_slide(page(number=2), 1, broken).body is None
    with pytest.raises(ConfigurationError) as exc_info:
        map_to_slide(page(body="Body", number=2), 1, broken)
    assert exc_info.value.page_number == 2


def test_missing_font_raises(profile):
    data = profile.to_dict()
    del data["design"]["fonts"]["title"]
    broken = type(profile).from_dict(data)
    with pytest.raises(ConfigurationError, match="design.fonts.title"):
        map_to_slide(page(), 1, broken)
