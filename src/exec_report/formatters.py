"""Consistent formatting for report numbers and dates. Never render raw floats."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from .labels import ReportLabels
from .payload import ActionItem, FinancialAlert, RedFlag, TimelineEvent

_DEFAULT_LABELS = ReportLabels()


def format_currency(value: Optional[float], labels: ReportLabels = _DEFAULT_LABELS) -> str:
    if value is None:
        return labels.unavailable
    return f'DKK {value:,.0f}'.replace(',', '.')


def format_percent(value: Optional[float], labels: ReportLabels = _DEFAULT_LABELS) -> str:
    if value is None:
        return labels.unavailable
    sign = '+' if value >= 0 else ''
    return f'{sign}{value:.1f}%'


def format_days(value: Optional[float], labels: ReportLabels = _DEFAULT_LABELS) -> str:
    if value is None:
        return labels.unavailable
    return labels.days_unit.format(count=f'{value:,.0f}')


def format_date(value: Any, labels: ReportLabels = _DEFAULT_LABELS) -> str:
    if value is None:
        return labels.unavailable
    if isinstance(value, datetime):
        return value.strftime('%d %b %Y')
    if isinstance(value, date):
        return value.strftime('%d %b %Y')
    text = str(value).strip()
    if not text:
        return labels.unavailable
    for fmt in ('%Y-%m-%d', '%d.%m.%Y', '%d/%m/%Y'):
        try:
            return datetime.strptime(text[:10], fmt).strftime('%d %b %Y')
        except ValueError:
            continue
    return text


def _unit_value(value: Optional[float], unit: str, labels: ReportLabels) -> str:
    if unit.upper() == 'DKK':
        return format_currency(value, labels)
    return format_days(value, labels)


def format_alert(alert: FinancialAlert, labels: ReportLabels = _DEFAULT_LABELS) -> str:
    base = f'{alert.label}: {_unit_value(alert.value, alert.unit, labels)}'
    return f'{base} — {alert.description}' if alert.description else base


def format_red_flag(flag: RedFlag, labels: ReportLabels = _DEFAULT_LABELS) -> str:
    base = f'{flag.label}: {_unit_value(flag.value, flag.unit, labels)}'
    return f'{base} — {flag.description}' if flag.description else base


def format_timeline_item(event: TimelineEvent, labels: ReportLabels = _DEFAULT_LABELS) -> str:
    base = f'{format_date(event.date, labels)} · {event.title}'
    return f'{base} — {event.description}' if event.description else base


def format_action_item(item: ActionItem, labels: ReportLabels = _DEFAULT_LABELS) -> str:
    parts = [item.title]
    if item.priority:
        parts.append(f'({item.priority})')
    parts.append(f'{labels.responsibility}: {item.owner_role or labels.not_specified}')
    parts.append(f'{labels.horizon}: {item.time_horizon or labels.not_applicable}')
    header = ' · '.join(parts)
    return f'{header} — {item.description}' if item.description else header
