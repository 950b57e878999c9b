"""Block renderers for the executive report cards.

Every renderer has the signature ``render_x(mode, ctx, ...) -> height``. In
``RenderMode.MEASURE`` it only computes the height the block will take at
``ctx.width``; in ``RenderMode.DRAW`` it paints at ``ctx.x, ctx.y`` (top-down)
and returns the same height. Both modes share the wrapping calls, so the two
heights are always equal.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

from .design_tokens import (
    ACCENT_SOFT, BULLET, PAGE_HEADING, TEXT_PRIMARY, TEXT_SECONDARY,
    TONE_COLORS, RISK_LEVEL_COLORS, ICON_BULLETS,
    CARD_TITLE_SIZE, SECTION_LABEL_SIZE, BODY_SIZE, METRIC_LABEL_SIZE,
    METRIC_VALUE_SIZE, KEY_FIGURE_SIZE, BADGE_SIZE,
    CARD_TITLE_LEADING, SECTION_LABEL_LEADING, BODY_LEADING, BULLET_LEADING,
    HEADING_RULE_WIDTH, METRIC_COLUMNS, METRIC_COLUMN_GAP, METRIC_ROW_HEIGHT,
    KEY_FIGURE_HEIGHT, BULLET_INDENT, ITEM_GAP,
    BADGE_HEIGHT, BADGE_MIN_WIDTH, BADGE_PADDING, BADGE_RADIUS,
    RISK_TEXT_OFFSET, RISK_ROW_SPACING, CHART_MAX_HEIGHT,
)
from .fonts import DEFAULT_FONTS, FontSet
from .labels import ReportLabels
from .payload import ChartImage, RiskScore
from .surface import PageSurface


class RenderMode(Enum):
    MEASURE = 'measure'
    DRAW = 'draw'


@dataclass(frozen=True)
class RenderContext:
    surface: PageSurface
    x: float
    y: float
    width: float
    fonts: FontSet = DEFAULT_FONTS

    def at(self, offset: float) -> 'RenderContext':
        """A fresh context ``offset`` points further down."""
        return replace(self, y=self.y + offset)


@dataclass(frozen=True)
class MetricCell:
    label: str
    value: str
    tone: str = 'neutral'


def render_card_heading(mode: RenderMode, ctx: RenderContext, text: str) -> float:
    if mode is RenderMode.DRAW:
        ctx.surface.draw_text(
            text, ctx.x, ctx.y + CARD_TITLE_SIZE + 2,
            ctx.fonts.bold, CARD_TITLE_SIZE, PAGE_HEADING,
        )
        rule_y = ctx.y + CARD_TITLE_LEADING - 6
        ctx.surface.draw_line(ctx.x, rule_y, ctx.x + HEADING_RULE_WIDTH, rule_y, ACCENT_SOFT)
    return CARD_TITLE_LEADING


def render_section_label(mode: RenderMode, ctx: RenderContext, label: str) -> float:
    if not label:
        return 0
    if mode is RenderMode.DRAW:
        ctx.surface.draw_text(
            label.upper(), ctx.x, ctx.y + SECTION_LABEL_SIZE + 1,
            ctx.fonts.bold, SECTION_LABEL_SIZE, TEXT_SECONDARY,
        )
    return SECTION_LABEL_LEADING


def render_metric_grid(mode: RenderMode, ctx: RenderContext, metrics: Sequence[MetricCell]) -> float:
    """Fixed two-column grid; every cell is one fixed row tall."""
    if not metrics:
        return 0

    column_width = (ctx.width - METRIC_COLUMN_GAP) / METRIC_COLUMNS
    if mode is RenderMode.DRAW:
        for index, metric in enumerate(metrics):
            column = index % METRIC_COLUMNS
            row = index // METRIC_COLUMNS
            base_x = ctx.x + column * (column_width + METRIC_COLUMN_GAP)
            base_y = ctx.y + row * METRIC_ROW_HEIGHT
            ctx.surface.draw_text(
                metric.label.upper(), base_x, base_y + 10,
                ctx.fonts.bold, METRIC_LABEL_SIZE, TEXT_SECONDARY,
            )
            color = TONE_COLORS.get(metric.tone, TONE_COLORS['neutral'])
            ctx.surface.draw_text(
                metric.value, base_x, base_y + 30,
                ctx.fonts.bold, METRIC_VALUE_SIZE, color,
            )

    rows = -(-len(metrics) // METRIC_COLUMNS)
    return rows * METRIC_ROW_HEIGHT


def render_paragraph(mode: RenderMode, ctx: RenderContext, text: str) -> float:
    if not text:
        return 0
    lines = ctx.surface.measure_wrapped_lines(text, ctx.width, ctx.fonts.regular, BODY_SIZE)
    if mode is RenderMode.DRAW:
        ctx.surface.draw_lines(
            lines, ctx.x, ctx.y + 12, BODY_LEADING,
            ctx.fonts.regular, BODY_SIZE, TEXT_PRIMARY,
        )
    return len(lines) * BODY_LEADING


def render_key_figure(mode: RenderMode, ctx: RenderContext, label: str, value: str) -> float:
    if mode is RenderMode.DRAW:
        ctx.surface.draw_text(
            label.upper(), ctx.x, ctx.y + SECTION_LABEL_SIZE + 1,
            ctx.fonts.bold, SECTION_LABEL_SIZE, TEXT_SECONDARY,
        )
        ctx.surface.draw_text(
            value, ctx.x, ctx.y + SECTION_LABEL_SIZE + 20,
            ctx.fonts.bold, KEY_FIGURE_SIZE, PAGE_HEADING,
        )
    return KEY_FIGURE_HEIGHT


def render_bullet_list(
    mode: RenderMode,
    ctx: RenderContext,
    items: Sequence[str],
    icon: str = ICON_BULLETS['default'],
) -> float:
    """Each item wraps independently at ``width - BULLET_INDENT``.

    An empty list takes no space; callers skip its section label as well.
    """
    offset = 0.0
    text_width = ctx.width - BULLET_INDENT
    for item in items:
        if not item:
            continue
        lines = ctx.surface.measure_wrapped_lines(item, text_width, ctx.fonts.regular, BODY_SIZE)
        if mode is RenderMode.DRAW:
            top = ctx.y + offset + BODY_SIZE
            ctx.surface.draw_text(icon, ctx.x, top, ctx.fonts.bold, BODY_SIZE, BULLET)
            ctx.surface.draw_lines(
                lines, ctx.x + BULLET_INDENT, top, BULLET_LEADING,
                ctx.fonts.regular, BODY_SIZE, TEXT_PRIMARY,
            )
        offset += len(lines) * BULLET_LEADING + ITEM_GAP
    return offset


def _badge_width(ctx: RenderContext, text: str) -> float:
    measured = ctx.surface.text_width(text, ctx.fonts.bold, BADGE_SIZE)
    # Never reaches into the justification column
    return min(max(BADGE_MIN_WIDTH, measured + BADGE_PADDING), RISK_TEXT_OFFSET - 14)


def _badge_label_size(ctx: RenderContext, text: str, badge_width: float) -> float:
    """Font size that keeps the label inside the badge."""
    measured = ctx.surface.text_width(text, ctx.fonts.bold, BADGE_SIZE)
    room = badge_width - BADGE_PADDING
    if measured <= room:
        return BADGE_SIZE
    return BADGE_SIZE * room / measured


def render_risk_rows(
    mode: RenderMode,
    ctx: RenderContext,
    risks: Sequence[RiskScore],
    labels: ReportLabels,
) -> float:
    if not risks:
        return 0

    offset = 0.0
    text_x = ctx.x + RISK_TEXT_OFFSET
    text_width = max(1.0, ctx.width - RISK_TEXT_OFFSET)
    for risk in risks:
        lines = ctx.surface.measure_wrapped_lines(risk.justification, text_width, ctx.fonts.regular, BODY_SIZE)
        # category line plus the wrapped justification
        block_height = max(BADGE_HEIGHT, (1 + len(lines)) * BODY_LEADING + 6)

        if mode is RenderMode.DRAW:
            level_label = labels.risk_level(risk.risk_level)
            fill, text_color = RISK_LEVEL_COLORS.get(risk.risk_level, RISK_LEVEL_COLORS['n/a'])
            badge_width = _badge_width(ctx, level_label)
            label_size = _badge_label_size(ctx, level_label, badge_width)
            top = ctx.y + offset
            ctx.surface.draw_rect(ctx.x, top, badge_width, BADGE_HEIGHT, fill=fill, radius=BADGE_RADIUS)
            ctx.surface.draw_text(
                level_label, ctx.x + badge_width / 2, top + BADGE_HEIGHT / 2 + 3,
                ctx.fonts.bold, label_size, text_color, align='center',
            )
            ctx.surface.draw_text(
                risk.category, text_x, top + 12,
                ctx.fonts.bold, BODY_SIZE, PAGE_HEADING,
            )
            ctx.surface.draw_lines(
                lines, text_x, top + 12 + BODY_LEADING, BODY_LEADING,
                ctx.fonts.regular, BODY_SIZE, TEXT_PRIMARY,
            )

        offset += block_height + RISK_ROW_SPACING
    return offset


def render_chart_image(mode: RenderMode, ctx: RenderContext, chart: ChartImage) -> float:
    """Full-width image, height from the aspect ratio and capped.

    When the cap applies the image is narrowed and centred to keep its aspect.
    """
    if not chart.data or chart.width <= 0 or chart.height <= 0:
        return 0

    ratio = chart.height / chart.width
    height = min(ctx.width * ratio, CHART_MAX_HEIGHT)
    if mode is RenderMode.DRAW:
        width = min(ctx.width, height / ratio)
        ctx.surface.draw_image(chart.data, ctx.x + (ctx.width - width) / 2, ctx.y, width, height)
    return height
