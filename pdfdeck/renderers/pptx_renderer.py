"""
PPTX renderer using python-pptx.

Draws SlideDescriptions onto blank slides. Everything about position and
style is already resolved; this module only translates it to DrawingML.
"""

from pathlib import Path
from typing import List, Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE, PP_PARAGRAPH_ALIGNMENT
from pptx.oxml.ns import qn
from pptx.util import Inches, Pt

from pdfdeck.config import LayoutConfig
from pdfdeck.models import Placeholder, SlideDescription

BLANK_LAYOUT = 6
BULLET_CHAR = "•"
BULLET_INDENT = Inches(0.3)

ALIGN_MAP = {
    "left": PP_PARAGRAPH_ALIGNMENT.LEFT,
    "center": PP_PARAGRAPH_ALIGNMENT.CENTER,
    "right": PP_PARAGRAPH_ALIGNMENT.RIGHT,
}

ANCHOR_MAP = {
    "top": MSO_ANCHOR.TOP,
    "middle": MSO_ANCHOR.MIDDLE,
    "bottom": MSO_ANCHOR.BOTTOM,
}


class PPTXRenderer:
    """
    Render SlideDescriptions into a PowerPoint presentation.

    Features:
    - One text box per placeholder at its absolute position
    - Bullet lists as one bulleted paragraph per item
    - Explicit wrap, no autofit, one paragraph per source line
    """

    def __init__(self, layout: Optional[LayoutConfig] = None):
        self.layout = layout or LayoutConfig()

    def build(self, slides: List[SlideDescription]):
        """Build an in-memory presentation."""
        prs = Presentation()
        prs.slide_width = Inches(self.layout.slide_width)
        prs.slide_height = Inches(self.layout.slide_height)

        for description in slides:
            slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
            for placeholder in description.placeholders.values():
                self._render_placeholder(slide, placeholder)
        return prs

    def render(self, slides: List[SlideDescription], output_path: Path) -> Path:
        """
        Render all slides to a PPTX file.

        Args:
            slides: One SlideDescription per page, in deck order
            output_path: Path to save the PPTX file

        Returns:
            Path to the generated PPTX file
        """
        output_path = Path(output_path)
        print(f"[PPTX] Rendering {len(slides)} slides")
        prs = self.build(slides)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        prs.save(str(output_path))
        print(f"[PPTX] Saved presentation to {output_path}")
        return output_path

    def _render_placeholder(self, slide, placeholder: Placeholder) -> None:
        geometry = placeholder.geometry
        textbox = slide.shapes.add_textbox(
            Inches(geometry.x), Inches(geometry.y), Inches(geometry.width), Inches(geometry.height)
        )
        textbox.name = placeholder.name

        text_frame = textbox.text_frame
        text_frame.word_wrap = placeholder.wrap
        if not placeholder.autofit:
            text_frame.auto_size = MSO_AUTO_SIZE.NONE
        text_frame.vertical_anchor = ANCHOR_MAP[placeholder.vertical_align]

        if placeholder.bullet and placeholder.bullets is not None:
            items = placeholder.bullets
        elif placeholder.break_line:
            items = (placeholder.text or "").split("\n")
        else:
            items = [(placeholder.text or "").replace("\n", " ")]

        text_frame.clear()
        for i, item in enumerate(items):
            p = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
            p.alignment = ALIGN_MAP[placeholder.align]
            if placeholder.style.line_spacing is not None:
                p.line_spacing = 1 + placeholder.style.line_spacing / 100

            run = p.add_run()
            run.text = item
            self._apply_font(run, placeholder)

            if placeholder.bullet:
                self._add_bullet(p)

    @staticmethod
    def _apply_font(run, placeholder: Placeholder) -> None:
        style = placeholder.style
        run.font.name = style.font_family
        run.font.size = Pt(style.font_size)
        run.font.bold = style.weight == "bold"
        run.font.color.rgb = RGBColor.from_string(style.color.upper())

    @staticmethod
    def _add_bullet(paragraph) -> None:
        """Give a paragraph a hanging bullet glyph (text boxes have none by default)."""
        pPr = paragraph._p.get_or_add_pPr()
        pPr.set("marL", str(int(BULLET_INDENT)))
        pPr.set("indent", str(-int(BULLET_INDENT)))
        bu_char = pPr.makeelement(qn("a:buChar"), {"char": BULLET_CHAR})
        pPr.append(bu_char)
