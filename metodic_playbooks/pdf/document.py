"""
Assemble the extended playbook PDF.

Page order is fixed: cover, executive summary, design principles, one page per
intervention step (in sequence order), roadmap, final CTA page. Each page's
content is shrunk to fit its frame, so the document always has
5 + len(sequence) pages.
"""

import logging
from datetime import date
from functools import partial
from io import BytesIO
from typing import List, Optional

from reportlab.pdfgen import canvas
from reportlab.platypus import (
    BaseDocTemplate,
    Frame,
    KeepInFrame,
    NextPageTemplate,
    PageBreak,
    PageTemplate,
)

from . import pages
from .assets import LogoAsset, draw_logo, load_logo
from .content import PlaybookView, resolve
from .styles import (
    BODY_FONT,
    C,
    CONTENT_HEIGHT,
    CONTENT_WIDTH,
    MARGIN_BOTTOM,
    MARGIN_X,
    PAGE_HEIGHT,
    PAGE_WIDTH,
)
from ..config import FOOTER_CAPTION, PDF_AUTHOR, PDF_CREATOR, PDF_SUBJECT
from ..models import PlaybookRecord

logger = logging.getLogger(__name__)

COVER_TOP = 24
COVER_BOTTOM = 50
COVER_WIDTH = PAGE_WIDTH - 2 * MARGIN_X
COVER_HEIGHT = PAGE_HEIGHT - COVER_TOP - COVER_BOTTOM


class PlaybookRenderError(RuntimeError):
    """Raised once when the document cannot be produced. No partial output."""


class NumberedCanvas(canvas.Canvas):
    """Holds every page until save() so the footer can print `page / total`."""

    def __init__(self, *args, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._saved_page_states = []
        self.running_footer = False

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        num_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            if self.running_footer:
                self.draw_page_footer(num_pages)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def draw_page_footer(self, page_count):
        y = 18
        self.saveState()
        self.setStrokeColor(C["border_light"])
        self.setLineWidth(1)
        self.line(MARGIN_X, y + 14, PAGE_WIDTH - MARGIN_X, y + 14)
        self.setFont(BODY_FONT, 9)
        self.setFillColor(C["light"])
        self.drawString(MARGIN_X, y, FOOTER_CAPTION)
        self.drawRightString(PAGE_WIDTH - MARGIN_X, y, f"{self._pageNumber} / {page_count}")
        self.restoreState()


# ====== Page decorations ======

def _cover_page(canv, doc):
    canv.running_footer = False
    canv.saveState()
    canv.setFont(BODY_FONT, 10)
    canv.setFillColor(C["light"])
    canv.drawCentredString(PAGE_WIDTH / 2.0, 22, FOOTER_CAPTION)
    canv.restoreState()


def _content_page(canv, doc, label: str, logo: LogoAsset):
    canv.running_footer = True
    top = PAGE_HEIGHT - 18
    canv.saveState()
    draw_logo(canv, logo, MARGIN_X, top - 24, 70, 24)
    canv.setFont(BODY_FONT, 8)
    canv.setFillColor(C["light"])
    canv.drawRightString(PAGE_WIDTH - MARGIN_X, top - 16, label.upper())
    canv.setStrokeColor(C["border_light"])
    canv.setLineWidth(1)
    canv.line(MARGIN_X, top - 32, PAGE_WIDTH - MARGIN_X, top - 32)
    canv.restoreState()


def _fit(story: List, width: float, height: float) -> KeepInFrame:
    return KeepInFrame(width, height, story, mode="shrink")


# ====== Assembly ======

def build_story(view: PlaybookView, logo: LogoAsset):
    """Return (page templates, story) for the whole document."""
    cover_frame = Frame(
        MARGIN_X, COVER_BOTTOM, COVER_WIDTH, COVER_HEIGHT,
        leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0, id="cover",
    )
    templates = [PageTemplate(id="cover", frames=[cover_frame], onPage=_cover_page)]
    pages_content = [
        ("cover", None, pages.build_cover(view.cover, logo)),
        ("summary", "Overview", pages.build_summary(view.summary)),
        ("principles", "Foundations", pages.build_principles(view)),
    ]
    for idx, step in enumerate(view.steps, start=1):
        pages_content.append((f"step-{idx}", step.section_label, pages.build_step(step)))
    pages_content += [
        ("roadmap", "Implementation", pages.build_roadmap(view.roadmap)),
        ("final", "Next Steps", pages.build_final(view.cta, logo)),
    ]

    story = []
    for i, (template_id, label, flowables) in enumerate(pages_content):
        if label is not None:
            frame = Frame(
                MARGIN_X, MARGIN_BOTTOM, CONTENT_WIDTH, CONTENT_HEIGHT,
                leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0, id=template_id,
            )
            templates.append(PageTemplate(
                id=template_id, frames=[frame],
                onPage=partial(_content_page, label=label, logo=logo),
            ))
            story.append(_fit(flowables, CONTENT_WIDTH, CONTENT_HEIGHT - 1))
        else:
            story.append(_fit(flowables, COVER_WIDTH, COVER_HEIGHT - 1))

        if i < len(pages_content) - 1:
            story.append(NextPageTemplate(pages_content[i + 1][0]))
            story.append(PageBreak())
    return templates, story


def assemble(view: PlaybookView, logo: LogoAsset) -> bytes:
    buf = BytesIO()
    doc = BaseDocTemplate(
        buf,
        pagesize=(PAGE_WIDTH, PAGE_HEIGHT),
        title=view.title,
        author=PDF_AUTHOR,
        subject=PDF_SUBJECT,
        creator=PDF_CREATOR,
        invariant=1,
    )
    templates, story = build_story(view, logo)
    doc.addPageTemplates(templates)
    doc.build(story, canvasmaker=NumberedCanvas)
    return buf.getvalue()


def render_playbook_pdf(
    playbook: PlaybookRecord,
    generated_on: Optional[date] = None,
    logo: Optional[LogoAsset] = None,
) -> bytes:
    """PlaybookRecord -> complete PDF bytes, or PlaybookRenderError."""
    try:
        view = resolve(playbook, generated_on=generated_on)
        return assemble(view, logo if logo is not None else load_logo())
    except Exception as e:
        logger.exception("PDF generation failed for playbook %s", playbook.slug)
        raise PlaybookRenderError(f"PDF generation failed for {playbook.slug}: {e}") from e
