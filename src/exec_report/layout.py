"""Row and page layout for executive report cards.

Rows of one or two cards are measured, fitted onto the current page (a row is
never split), drawn with a shared height, and the cursor advances. Once every
row is placed the footer pass stamps each page, since the page total is only
known then.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Sequence, Tuple

from .blocks import RenderContext, RenderMode
from .cards import Card
from .design_tokens import (
    CARD_BACKGROUND, CARD_BORDER, CARD_PADDING, CARD_RADIUS, COLUMN_GAP, ROW_GAP,
    PAGE_BACKGROUND, PAGE_HEADING, PAGE_MARGIN, TEXT_MUTED, TEXT_SECONDARY,
    PAGE_TITLE_SIZE, PAGE_SUBTITLE_SIZE, FOOTER_SIZE,
    HEADER_TITLE_GAP, HEADER_SUBJECT_GAP, HEADER_GENERATED_GAP,
)
from .errors import ReportError, RowOverflow
from .fonts import DEFAULT_FONTS, FontSet
from .surface import PageSurface

log = logging.getLogger(__name__)


class LayoutState(Enum):
    IDLE = 'idle'
    ROW_SPAN_DETERMINATION = 'row_span_determination'
    ROW_MEASUREMENT = 'row_measurement'
    PAGE_FIT_CHECK = 'page_fit_check'
    ROW_DRAW = 'row_draw'
    FOOTER_PASS = 'footer_pass'
    DONE = 'done'


@dataclass
class LayoutCursor:
    y: float
    page: int = 1


@dataclass(frozen=True)
class RowPlacement:
    index: int
    page: int
    top: float
    height: float
    widths: Tuple[float, ...]


class LayoutEngine:
    def __init__(self, surface: PageSurface, fonts: FontSet = DEFAULT_FONTS, margin: float = PAGE_MARGIN):
        self.surface = surface
        self.fonts = fonts
        self.margin = float(margin)
        self.top = self.margin
        self.bottom = surface.page_height - self.margin
        self.content_width = surface.page_width - 2 * self.margin
        if self.content_width <= 0:
            raise ReportError('Page margins leave no room for content.')
        self.cursor = LayoutCursor(y=self.top)
        self.state = LayoutState.IDLE
        self.placements: List[RowPlacement] = []
        self.overflows: List[RowOverflow] = []
        self.page_breaks = 0
        self._rows_seen = 0

    @property
    def printable_height(self) -> float:
        return self.bottom - self.top

    def _enter(self, state: LayoutState):
        log.debug('layout %s -> %s', self.state.value, state.value)
        self.state = state

    # ─── Pages ───────────────────────────────────────────────────────────

    def start(self):
        """Paint the first page."""
        self.surface.fill_page(PAGE_BACKGROUND)

    def _break_page(self):
        self.surface.new_page()
        self.surface.fill_page(PAGE_BACKGROUND)
        self.cursor.page += 1
        self.cursor.y = self.top
        self.page_breaks += 1
        log.debug('page break, now on page %d', self.cursor.page)

    def _fits(self, height: float) -> bool:
        return self.cursor.y + height <= self.bottom

    def draw_header(self, title: str, lines: Sequence[str] = ()):
        """Page title and up to two subtitle lines above the first row."""
        s = self.surface
        s.draw_text(title, self.margin, self.cursor.y, self.fonts.bold, PAGE_TITLE_SIZE, PAGE_HEADING)
        self.cursor.y += HEADER_TITLE_GAP
        gaps = (HEADER_SUBJECT_GAP, HEADER_GENERATED_GAP)
        for index, line in enumerate(lines[:2]):
            s.draw_text(line, self.margin, self.cursor.y, self.fonts.regular, PAGE_SUBTITLE_SIZE, TEXT_SECONDARY)
            self.cursor.y += gaps[index]

    # ─── Rows ────────────────────────────────────────────────────────────

    @property
    def two_columns(self) -> bool:
        return self.content_width - COLUMN_GAP > 0

    def column_widths(self, row: Sequence[Card]) -> List[float]:
        multi_column = self.two_columns and len(row) > 1 and all(card.span != 2 for card in row)
        if not multi_column:
            return [self.content_width] * len(row)
        first = (self.content_width - COLUMN_GAP) / 2
        return [first, self.content_width - COLUMN_GAP - first]

    def _normalize(self, rows: Sequence[Sequence[Card]]) -> List[List[Card]]:
        out: List[List[Card]] = []
        for row in rows:
            row = list(row)
            if not row:
                continue
            if len(row) > 2:
                raise ReportError(f'A row holds at most two cards, got {len(row)}.')
            if len(row) > 1 and (not self.two_columns or any(card.span == 2 for card in row)):
                # full-width cards, or pages too narrow for two columns, get one card per row
                log.debug('splitting row into %d single-card rows', len(row))
                out.extend([card] for card in row)
                continue
            out.append(row)
        return out

    def render_row(self, row: Sequence[Card]) -> RowPlacement:
        index = self._rows_seen
        self._rows_seen += 1

        self._enter(LayoutState.ROW_SPAN_DETERMINATION)
        widths = self.column_widths(row)

        self._enter(LayoutState.ROW_MEASUREMENT)
        heights = []
        for card, width in zip(row, widths):
            ctx = RenderContext(self.surface, 0.0, 0.0, max(1.0, width - 2 * CARD_PADDING), self.fonts)
            heights.append(card.render(RenderMode.MEASURE, ctx) + 2 * CARD_PADDING)
        row_height = max(heights)

        self._enter(LayoutState.PAGE_FIT_CHECK)
        if not self._fits(row_height) and self.cursor.y > self.top:
            self._break_page()
        if not self._fits(row_height):
            overflow = RowOverflow(
                row_index=index,
                page=self.cursor.page,
                height=row_height,
                printable_height=self.printable_height,
            )
            self.overflows.append(overflow)
            log.warning('Row overflows page: %s', overflow.describe())

        self._enter(LayoutState.ROW_DRAW)
        top = self.cursor.y
        x = self.margin
        for card, width in zip(row, widths):
            self.surface.draw_rect(
                x, top, width, row_height,
                fill=CARD_BACKGROUND, stroke=CARD_BORDER, radius=CARD_RADIUS,
            )
            ctx = RenderContext(self.surface, x + CARD_PADDING, top + CARD_PADDING, max(1.0, width - 2 * CARD_PADDING), self.fonts)
            card.render(RenderMode.DRAW, ctx)
            x += width + COLUMN_GAP

        placement = RowPlacement(index=index, page=self.cursor.page, top=top, height=row_height, widths=tuple(widths))
        self.placements.append(placement)
        self.cursor.y = top + row_height + ROW_GAP
        return placement

    def layout_rows(self, rows: Sequence[Sequence[Card]]) -> List[RowPlacement]:
        for row in self._normalize(rows):
            self.render_row(row)
        return list(self.placements)

    # ─── Footer ──────────────────────────────────────────────────────────

    def apply_footer(self, meta_text: str, page_label: Callable[[int, int], str]):
        """Stamp every page; runs once, after all rows are placed."""
        if self.state in (LayoutState.FOOTER_PASS, LayoutState.DONE):
            raise ReportError('Footer pass already applied.')
        self._enter(LayoutState.FOOTER_PASS)
        s = self.surface
        total = s.page_count()
        footer_y = s.page_height - self.margin / 2
        for page in range(1, total + 1):
            s.select_page(page)
            s.draw_text(meta_text, self.margin, footer_y, self.fonts.regular, FOOTER_SIZE, TEXT_MUTED)
            s.draw_text(
                page_label(page, total), s.page_width - self.margin, footer_y,
                self.fonts.regular, FOOTER_SIZE, TEXT_MUTED, align='right',
            )
        self._enter(LayoutState.DONE)
