"""Small custom flowables used by the page builders."""

from typing import List

from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import Flowable

from .icons import IconDefinition, icon_drawing
from .styles import BODY_FONT, C


class ChipRow(Flowable):
    """Centered row of pill-shaped labels; wraps onto extra rows when too wide."""

    def __init__(self, labels: List[str], font_size: float = 8.5, pad_x: float = 10,
                 pad_y: float = 4, gap: float = 8, row_gap: float = 6):
        Flowable.__init__(self)
        self.labels = [label for label in labels if label]
        self.font_size = font_size
        self.pad_x = pad_x
        self.pad_y = pad_y
        self.gap = gap
        self.row_gap = row_gap
        self._rows = []

    def _chip_width(self, label):
        return stringWidth(label, BODY_FONT, self.font_size) + 2 * self.pad_x

    def _chip_height(self):
        return self.font_size + 2 * self.pad_y

    def wrap(self, availWidth, availHeight):
        rows, row, used = [], [], 0.0
        for label in self.labels:
            w = self._chip_width(label)
            needed = w if not row else used + self.gap + w
            if row and needed > availWidth:
                rows.append((row, used))
                row, used = [label], w
            else:
                row.append(label)
                used = needed
        if row:
            rows.append((row, used))
        self._rows = rows
        self.width = availWidth
        self.height = len(rows) * self._chip_height() + max(len(rows) - 1, 0) * self.row_gap
        return self.width, self.height

    def draw(self):
        c = self.canv
        h = self._chip_height()
        y = self.height - h
        c.setFont(BODY_FONT, self.font_size)
        c.setLineWidth(1)
        c.setStrokeColor(C["border"])
        for labels, used in self._rows:
            x = (self.width - used) / 2.0
            for label in labels:
                w = self._chip_width(label)
                c.roundRect(x, y, w, h, h / 2.0, stroke=1, fill=0)
                c.setFillColor(C["heading"])
                c.drawString(x + self.pad_x, y + self.pad_y + 1.5, label)
                x += w + self.gap
            y -= h + self.row_gap


class IconBadge(Flowable):
    """Topic icon inside a circular frame, centered in the available width."""

    def __init__(self, icon: IconDefinition, diameter: float = 72, icon_size: float = 32,
                 space_after: float = 22):
        Flowable.__init__(self)
        self.icon = icon
        self.diameter = diameter
        self.icon_size = icon_size
        self.space_after = space_after

    def wrap(self, availWidth, availHeight):
        self.width = availWidth
        self.height = self.diameter + self.space_after
        return self.width, self.height

    def draw(self):
        c = self.canv
        r = self.diameter / 2.0
        cx = self.width / 2.0
        cy = self.space_after + r
        c.setLineWidth(2)
        c.setStrokeColor(C["border"])
        c.circle(cx, cy, r, stroke=1, fill=0)
        drawing = icon_drawing(self.icon, size=self.icon_size)
        drawing.drawOn(c, cx - self.icon_size / 2.0, cy - self.icon_size / 2.0)
