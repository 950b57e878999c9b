"""User-visible strings for the executive report.

Callers pass already-localized strings; the defaults are English. Templated
entries use ``str.format`` placeholders.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping


@dataclass(frozen=True)
class ReportLabels:
    page_title: str = 'Executive Summary'
    subject_line: str = 'Subject: {subject}'
    generated_line: str = 'Generated {date}'
    footer_meta: str = 'Exported {date} · {subject}'
    footer_page: str = 'Page {current} of {total}'

    financial_title: str = 'Financial Overview'
    financial_status: str = 'Status {year}'
    observations: str = 'Observations'
    gross_profit: str = 'Gross profit'
    yoy_gross_profit: str = 'YoY gross profit'
    profit_after_tax: str = 'Profit after tax'
    yoy_profit_after_tax: str = 'YoY profit after tax'
    liquidity: str = 'Liquidity'
    dso: str = 'DSO'
    intercompany_loans: str = 'Intercompany loans'

    risk_title: str = 'Risk Overview'
    macro_analysis: str = 'Macro analysis'
    compliance_note: str = 'Compliance note'
    tax_exposure: str = 'Tax case exposure'
    weighted_risks: str = 'Weighted risks'
    red_flags: str = 'Red flags'
    none_registered: str = 'None registered'

    actions_title: str = 'Action Radar'
    upcoming_deadlines: str = 'Upcoming Deadlines'
    board_actionables: str = 'Board Actionables'
    critical_events: str = 'Critical Events'
    upcoming_events: str = 'Next Milestones'
    responsibility: str = 'Responsibility'
    horizon: str = 'Horizon'
    not_specified: str = 'Not specified'
    not_applicable: str = 'N/A'

    unavailable: str = 'Unavailable'
    days_unit: str = '{count} days'

    risk_level_critical: str = 'Critical'
    risk_level_high: str = 'High'
    risk_level_medium: str = 'Medium'
    risk_level_low: str = 'Low'
    risk_level_na: str = 'N/A'

    def risk_level(self, level: str) -> str:
        return {
            'critical': self.risk_level_critical,
            'high': self.risk_level_high,
            'medium': self.risk_level_medium,
            'low': self.risk_level_low,
        }.get(level, self.risk_level_na)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ReportLabels':
        """Override defaults with any known keys; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        overrides = {k: str(v) for k, v in (data or {}).items() if k in known and v is not None}
        return replace(cls(), **overrides)
