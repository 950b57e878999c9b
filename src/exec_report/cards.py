"""Cards: headed groups of blocks laid out as one unit in a row."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .blocks import (
    MetricCell, RenderContext, RenderMode,
    render_bullet_list, render_card_heading, render_chart_image, render_key_figure,
    render_metric_grid, render_paragraph, render_risk_rows, render_section_label,
)
from .design_tokens import CHART_HEADING_GAP, ICON_BULLETS, PARAGRAPH_GAP
from .formatters import (
    format_action_item, format_alert, format_currency, format_days, format_percent,
    format_red_flag, format_timeline_item,
)
from .labels import ReportLabels
from .payload import ActionSummary, ChartImage, FinancialSummary, RiskSummary

RenderFn = Callable[[RenderMode, RenderContext], float]


@dataclass(frozen=True)
class Card:
    title: str
    render: RenderFn
    span: int = 1

    def __post_init__(self):
        if self.span not in (1, 2):
            raise ValueError(f'Card span must be 1 or 2, got {self.span!r}')


def _change_tone(value: Optional[float]) -> str:
    if value is None:
        return 'neutral'
    return 'positive' if value >= 0 else 'negative'


def _labelled_list(mode, ctx, offset, label, items, icon=ICON_BULLETS['default']) -> float:
    """Section label plus bullet list, or nothing when the list is empty."""
    if not items:
        return 0
    used = render_section_label(mode, ctx.at(offset), label)
    used += render_bullet_list(mode, ctx.at(offset + used), items, icon)
    return used


def financial_card(financial: FinancialSummary, labels: ReportLabels) -> Card:
    year = financial.latest_year if financial.latest_year is not None else labels.unavailable
    metrics = [
        MetricCell(labels.gross_profit, format_currency(financial.gross_profit, labels)),
        MetricCell(labels.yoy_gross_profit, format_percent(financial.yoy_gross_change, labels),
                   _change_tone(financial.yoy_gross_change)),
        MetricCell(labels.profit_after_tax, format_currency(financial.profit_after_tax, labels)),
        MetricCell(labels.yoy_profit_after_tax, format_percent(financial.yoy_profit_change, labels),
                   _change_tone(financial.yoy_profit_change)),
        MetricCell(labels.liquidity, format_currency(financial.liquidity, labels), 'warning'),
        MetricCell(labels.dso, format_days(financial.dso, labels)),
        MetricCell(labels.intercompany_loans, format_currency(financial.intercompany_loans, labels), 'negative'),
    ]
    alerts = [format_alert(alert, labels) for alert in financial.alerts]

    def render(mode: RenderMode, ctx: RenderContext) -> float:
        offset = render_card_heading(mode, ctx, labels.financial_title)
        offset += render_section_label(mode, ctx.at(offset), labels.financial_status.format(year=year))
        offset += render_metric_grid(mode, ctx.at(offset), metrics)
        offset += _labelled_list(mode, ctx, offset, labels.observations, alerts)
        return offset

    return Card(title=labels.financial_title, render=render)


def risk_card(risk: RiskSummary, labels: ReportLabels) -> Card:
    compliance = risk.compliance_issue or labels.none_registered
    exposure = (
        format_currency(risk.tax_case_exposure, labels)
        if risk.tax_case_exposure else labels.none_registered
    )
    red_flags = [format_red_flag(flag, labels) for flag in risk.red_flags]

    def render(mode: RenderMode, ctx: RenderContext) -> float:
        offset = render_card_heading(mode, ctx, labels.risk_title)
        if risk.sector_risk_summary:
            offset += render_section_label(mode, ctx.at(offset), labels.macro_analysis)
            offset += render_paragraph(mode, ctx.at(offset), risk.sector_risk_summary)
            offset += PARAGRAPH_GAP
        offset += render_key_figure(mode, ctx.at(offset), labels.compliance_note, compliance)
        offset += render_key_figure(mode, ctx.at(offset), labels.tax_exposure, exposure)
        if risk.risk_scores:
            offset += render_section_label(mode, ctx.at(offset), labels.weighted_risks)
            offset += render_risk_rows(mode, ctx.at(offset), risk.risk_scores, labels)
        offset += _labelled_list(mode, ctx, offset, labels.red_flags, red_flags, ICON_BULLETS['critical'])
        return offset

    return Card(title=labels.risk_title, render=render)


def actions_card(actions: ActionSummary, labels: ReportLabels) -> Card:
    sections = [
        (labels.upcoming_deadlines,
         [format_action_item(item, labels) for item in actions.upcoming_deadlines],
         ICON_BULLETS['deadline']),
        (labels.board_actionables,
         [format_action_item(item, labels) for item in actions.board_actionables],
         ICON_BULLETS['board']),
        (labels.critical_events,
         [format_timeline_item(event, labels) for event in actions.critical_events],
         ICON_BULLETS['critical']),
        (labels.upcoming_events,
         [format_timeline_item(event, labels) for event in actions.upcoming_events],
         ICON_BULLETS['roadmap']),
    ]

    def render(mode: RenderMode, ctx: RenderContext) -> float:
        offset = render_card_heading(mode, ctx, labels.actions_title)
        for label, items, icon in sections:
            offset += _labelled_list(mode, ctx, offset, label, items, icon)
        return offset

    return Card(title=labels.actions_title, render=render, span=2)


def chart_card(chart: ChartImage) -> Card:
    def render(mode: RenderMode, ctx: RenderContext) -> float:
        offset = render_card_heading(mode, ctx, chart.title)
        offset += CHART_HEADING_GAP
        offset += render_chart_image(mode, ctx.at(offset), chart)
        return offset

    return Card(title=chart.title, render=render)
