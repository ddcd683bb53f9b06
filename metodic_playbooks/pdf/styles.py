from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle

from ..config import PALETTE

PAGE_WIDTH, PAGE_HEIGHT = A4

# Content page margins
MARGIN_TOP = 64
MARGIN_BOTTOM = 56
MARGIN_X = 40
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN_X
CONTENT_HEIGHT = PAGE_HEIGHT - MARGIN_TOP - MARGIN_BOTTOM

C = {name: colors.HexColor(value) for name, value in PALETTE.items()}

BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"


def _style(name, **kw):
    base = dict(fontName=BODY_FONT, fontSize=10, leading=16, textColor=C["body"])
    base.update(kw)
    return ParagraphStyle(name, **base)


STYLES = {
    "body": _style("body", spaceAfter=7),
    "section_title": _style("section_title", fontName=BOLD_FONT, fontSize=18, leading=22,
                            textColor=C["heading"], spaceAfter=4),
    "sub_heading": _style("sub_heading", fontName=BOLD_FONT, fontSize=12, leading=15,
                          textColor=C["heading"], spaceBefore=8, spaceAfter=5),
    "bullet": _style("bullet", leftIndent=14, bulletIndent=0, spaceAfter=4,
                     bulletFontName=BOLD_FONT, bulletColor=C["accent"]),
    "source": _style("source", fontSize=9, leading=13, textColor=C["muted"], spaceAfter=5),
    "meta_label": _style("meta_label", fontSize=7.5, leading=9, textColor=C["muted"]),
    "meta_value": _style("meta_value", fontName=BOLD_FONT, fontSize=9, leading=11,
                         textColor=C["heading"]),
    # cover
    "cover_badge": _style("cover_badge", fontSize=9, leading=11, textColor=C["muted"],
                          alignment=TA_RIGHT),
    "cover_title": _style("cover_title", fontName=BOLD_FONT, fontSize=30, leading=36,
                          textColor=C["ink"], alignment=TA_CENTER, spaceAfter=12),
    "cover_subtitle": _style("cover_subtitle", fontSize=12, leading=18.6, textColor=C["muted"],
                             alignment=TA_CENTER, spaceAfter=28),
    "info_label": _style("info_label", fontName=BOLD_FONT, fontSize=9.5, leading=13,
                         textColor=C["heading"]),
    "info_value": _style("info_value", fontSize=9.5, leading=13),
    "wordmark": _style("wordmark", fontName=BOLD_FONT, fontSize=16, leading=20,
                       textColor=C["ink"]),
    "closing": _style("closing", fontSize=9, leading=12, textColor=C["light"],
                      alignment=TA_CENTER),
}
