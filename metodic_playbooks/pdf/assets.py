"""Brand logo: read once per render, with a remote-URL wordmark fallback."""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, Paragraph

from .styles import BOLD_FONT, C, STYLES
from ..config import LOGO_PATH, LOGO_FALLBACK_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogoAsset:
    data: Optional[bytes]
    url: str = LOGO_FALLBACK_URL

    @property
    def embedded(self) -> bool:
        return bool(self.data)


def load_logo(path: Optional[str] = None) -> LogoAsset:
    path = path or LOGO_PATH
    try:
        with open(path, "rb") as f:
            return LogoAsset(data=f.read())
    except OSError as e:
        logger.warning("Logo not readable at %s (%s); using %s", path, e, LOGO_FALLBACK_URL)
        return LogoAsset(data=None)


def logo_flowable(logo: LogoAsset, width: float, height: float):
    if logo.embedded:
        return Image(BytesIO(logo.data), width=width, height=height, kind="proportional")
    return Paragraph(f'<link href="{logo.url}">METODIC</link>', STYLES["wordmark"])


def draw_logo(canv, logo: LogoAsset, x: float, y: float, width: float, height: float) -> None:
    """Draw the logo on a canvas with its lower-left corner at (x, y)."""
    if logo.embedded:
        canv.drawImage(ImageReader(BytesIO(logo.data)), x, y, width=width, height=height,
                       mask="auto", preserveAspectRatio=True, anchor="w")
        return
    canv.saveState()
    canv.setFont(BOLD_FONT, 11)
    canv.setFillColor(C["ink"])
    canv.drawString(x, y + 6, "METODIC")
    canv.linkURL(logo.url, (x, y, x + width, y + height), relative=0)
    canv.restoreState()
