"""Drawing surface for the executive report.

A reportlab canvas that writes into memory and exposes top-down coordinates:
``y`` is measured from the top edge of the page and grows downwards, the same
way the layout engine advances its cursor. Finished pages are kept as saved
canvas states instead of being emitted immediately, so the footer pass can
revisit every page once the total page count is known.
"""

from __future__ import annotations

import io
from typing import Optional, Sequence

from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from .design_tokens import PAGE_SIZE
from .errors import EncodingError, ReportError


class PageSurface(canvas.Canvas):
    """In-memory multi-page canvas with page revisiting."""

    def __init__(self, pagesize=PAGE_SIZE):
        self._buffer = io.BytesIO()
        # invariant=1 drops the wall-clock timestamp and random document id
        super().__init__(self._buffer, pagesize=pagesize, invariant=1, pageCompression=1)
        # Shared by reference with every saved page state
        self._book = {'pages': [], 'sealed': False, 'saved': False}

    # ─── Geometry ────────────────────────────────────────────────────────

    @property
    def page_width(self) -> float:
        return float(self._pagesize[0])

    @property
    def page_height(self) -> float:
        return float(self._pagesize[1])

    def _flip(self, y: float, height: float = 0.0) -> float:
        return self.page_height - y - height

    # ─── Measurement (never draws) ───────────────────────────────────────

    def measure_wrapped_lines(self, text: str, max_width: float, font: str, size: float) -> list:
        """Wrap ``text`` exactly as the draw calls will render it."""
        if not text:
            return []
        return simpleSplit(text, font, size, max(1.0, float(max_width)))

    def text_width(self, text: str, font: str, size: float) -> float:
        return stringWidth(text or '', font, size)

    # ─── Drawing ─────────────────────────────────────────────────────────

    def draw_text(self, text, x, y, font, size, color, align='left'):
        """Draw a single line with its baseline at ``y``."""
        self.setFont(font, size)
        self.setFillColor(color)
        baseline = self._flip(y)
        if align == 'right':
            self.drawRightString(x, baseline, text)
        elif align == 'center':
            self.drawCentredString(x, baseline, text)
        else:
            self.drawString(x, baseline, text)

    def draw_lines(self, lines: Sequence[str], x, y, leading, font, size, color):
        """Draw pre-wrapped lines, first baseline at ``y``."""
        for index, line in enumerate(lines):
            self.draw_text(line, x, y + index * leading, font, size, color)

    def draw_rect(self, x, y, width, height, fill=None, stroke=None, radius=0.0, line_width=0.8):
        if fill is None and stroke is None:
            return
        if fill is not None:
            self.setFillColor(fill)
        if stroke is not None:
            self.setStrokeColor(stroke)
            self.setLineWidth(line_width)
        bottom = self._flip(y, height)
        flags = {'stroke': int(stroke is not None), 'fill': int(fill is not None)}
        if radius:
            self.roundRect(x, bottom, width, height, radius, **flags)
        else:
            self.rect(x, bottom, width, height, **flags)

    def draw_line(self, x1, y1, x2, y2, color, line_width=0.8):
        self.setStrokeColor(color)
        self.setLineWidth(line_width)
        self.line(x1, self._flip(y1), x2, self._flip(y2))

    def draw_image(self, data: bytes, x, y, width, height):
        try:
            reader = ImageReader(io.BytesIO(data))
            self.drawImage(reader, x, self._flip(y, height), width=width, height=height, mask='auto')
        except Exception as exc:
            raise EncodingError(f'Image rejected by drawing surface: {exc}') from exc

    def fill_page(self, color):
        self.setFillColor(color)
        self.rect(0, 0, self.page_width, self.page_height, stroke=0, fill=1)

    def set_document_info(self, title: str, subject: str = '', author: Optional[str] = None):
        self.setTitle(title)
        self.setSubject(subject)
        if author:
            self.setAuthor(author)
        self.setCreator('exec_report')

    # ─── Pages ───────────────────────────────────────────────────────────

    def new_page(self):
        if self._book['sealed']:
            raise ReportError('Cannot add pages after page revisiting has started.')
        self._book['pages'].append(dict(self.__dict__))
        self._startPage()

    def page_count(self) -> int:
        pages = len(self._book['pages'])
        return pages if self._book['sealed'] else pages + 1

    def _seal(self):
        if not self._book['sealed']:
            self._book['pages'].append(dict(self.__dict__))
            self._book['sealed'] = True

    def select_page(self, index: int):
        """Make page ``index`` (1-based) the drawing target."""
        self._seal()
        pages = self._book['pages']
        if not 1 <= index <= len(pages):
            raise ReportError(f'Page {index} out of range 1..{len(pages)}.')
        self.__dict__.update(pages[index - 1])

    def save(self) -> bytes:
        if self._book['saved']:
            raise ReportError('Surface already saved.')
        self._seal()
        try:
            for state in self._book['pages']:
                self.__dict__.update(state)
                canvas.Canvas.showPage(self)
            canvas.Canvas.save(self)
        except Exception as exc:
            raise EncodingError(f'Failed to encode document: {exc}') from exc
        self._book['saved'] = True
        return self._buffer.getvalue()
