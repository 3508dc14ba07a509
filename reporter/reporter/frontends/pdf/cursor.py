from typing import Callable, Optional

from reportlab.lib.colors import Color
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from .styles import FONT, MARGIN, PAGE_SIZE, TEXT

ELLIPSIS = "..."


def fit_text(value: str, font: str, size: float, width: float) -> str:
    """Shortens `value` with an ellipsis so it fits within `width` points."""
    if stringWidth(value, font, size) <= width:
        return value
    while value and stringWidth(value + ELLIPSIS, font, size) > width:
        value = value[:-1]
    return value + ELLIPSIS


class DocumentCursor:
    """Sequential drawing cursor on top of a ReportLab canvas.

    `y` is measured from the top edge of the page (ReportLab measures from
    the bottom), so sections can be laid out top to bottom and return the
    next free offset. `ensure_space` starts a new page when a block
    would run into the bottom margin; `on_page_end` is called before every
    page is finished (used for the page footer).
    """

    def __init__(
        self,
        canvas: Canvas,
        page_size: tuple[float, float] = PAGE_SIZE,
        margin: float = MARGIN,
        on_page_end: Optional[Callable[["DocumentCursor"], None]] = None,
    ) -> None:
        self.canvas = canvas
        self.width, self.height = page_size
        self.margin = margin
        self.on_page_end = on_page_end
        self.y = margin
        self.page = 1

    @property
    def left(self) -> float:
        return self.margin

    @property
    def right(self) -> float:
        return self.width - self.margin

    @property
    def content_width(self) -> float:
        return self.right - self.left

    @property
    def bottom(self) -> float:
        return self.height - self.margin

    def advance(self, dy: float) -> float:
        self.y += dy
        return self.y

    def ensure_space(self, needed: float) -> bool:
        """Starts a new page if `needed` points don't fit on the current one.

        Returns True if a page break happened.
        """
        if self.y + needed <= self.bottom:
            return False
        self.new_page()
        return True

    def new_page(self) -> None:
        self.end_page()
        self.canvas.showPage()
        self.page += 1
        self.y = self.margin

    def end_page(self) -> None:
        if self.on_page_end:
            self.on_page_end(self)

    def _baseline(self, y: float, size: float) -> float:
        # Text is positioned by the top of its line box, like the rest of the layout
        return self.height - y - size * 0.8

    def text(
        self,
        value: str,
        x: float,
        y: Optional[float] = None,
        *,
        size: float = 9,
        font: str = FONT,
        color: Color = TEXT,
        align: str = "left",
        width: Optional[float] = None,
    ) -> None:
        y = self.y if y is None else y
        c = self.canvas
        c.setFont(font, size)
        c.setFillColor(color)
        if width:
            value = fit_text(value, font, size, width)
        base = self._baseline(y, size)
        if align == "right" and width:
            c.drawRightString(x + width, base, value)
        elif align == "center" and width:
            c.drawCentredString(x + width / 2, base, value)
        else:
            c.drawString(x, base, value)

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: Optional[Color] = None,
        stroke: Optional[Color] = None,
        radius: float = 0,
    ) -> None:
        c = self.canvas
        c.saveState()
        if fill is not None:
            c.setFillColor(fill)
        if stroke is not None:
            c.setStrokeColor(stroke)
        bottom = self.height - y - height
        flags = dict(stroke=int(stroke is not None), fill=int(fill is not None))
        if radius:
            c.roundRect(x, bottom, width, height, radius, **flags)
        else:
            c.rect(x, bottom, width, height, **flags)
        c.restoreState()

    def image(
        self, image: ImageReader, x: float, y: float, width: float, height: float
    ) -> None:
        """Draws an image scaled to fit the box, keeping its aspect ratio."""
        self.canvas.drawImage(
            image,
            x,
            self.height - y - height,
            width=width,
            height=height,
            preserveAspectRatio=True,
            anchor="w",
            mask="auto",
        )

    def paragraph(
        self,
        value: str,
        x: float,
        width: float,
        *,
        size: float = 8,
        font: str = FONT,
        color: Color = TEXT,
        leading: Optional[float] = None,
        justify: bool = True,
    ) -> float:
        """Draws wrapped text starting at the cursor, breaking pages as needed.

        Every line but the last of each paragraph is justified when
        `justify` is set. Returns the offset below the last line.
        """
        leading = leading or size * 1.25
        for block in value.splitlines() or [""]:
            lines = simpleSplit(block, font, size, width) or [""]
            for i, line in enumerate(lines):
                self.ensure_space(leading)
                last = i == len(lines) - 1
                self._draw_line(line, x, width, size, font, color, justify and not last)
                self.y += leading
        return self.y

    def _draw_line(
        self,
        line: str,
        x: float,
        width: float,
        size: float,
        font: str,
        color: Color,
        justify: bool,
    ) -> None:
        t = self.canvas.beginText(x, self._baseline(self.y, size))
        t.setFont(font, size)
        t.setFillColor(color)
        spaces = line.count(" ")
        if justify and spaces:
            gap = (width - stringWidth(line, font, size)) / spaces
            t.setWordSpace(max(gap, 0))
        t.textLine(line)
        self.canvas.drawText(t)
