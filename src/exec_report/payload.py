"""Input contracts for the executive report.

All records are immutable. ``from_dict`` constructors accept the camelCase
JSON produced by the dashboard as well as snake_case keys, and degrade
missing or partial data to ``None`` / empty tuples instead of failing. Only
the case id is mandatory.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence, Tuple

from PIL import Image

from .config import DEFAULT_REPORT_VERSION
from .errors import InvalidPayload

RISK_LEVEL_ALIASES = {
    'kritisk': 'critical',
    'høj': 'high',
    'hoj': 'high',
    'moderat': 'medium',
    'lav': 'low',
    'critical': 'critical',
    'high': 'high',
    'medium': 'medium',
    'low': 'low',
}


def _get(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _number_or_none(value: Any) -> Optional[float]:
    if value in (None, '') or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        try:
            parsed = float(str(value).strip().replace(',', ''))
        except ValueError:
            return None
    if math.isnan(parsed):
        return None
    return parsed


def _text(value: Any) -> str:
    return '' if value is None else str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


def _records(value: Any) -> Sequence[Mapping[str, Any]]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return ()
    return [item for item in value if isinstance(item, Mapping)]


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def normalize_risk_level(level: Any) -> str:
    return RISK_LEVEL_ALIASES.get(_text(level).lower(), 'n/a')


def _iso_timestamp(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return _text(value)


# ─── Financial ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FinancialAlert:
    id: str
    label: str
    description: str = ''
    value: Optional[float] = None
    unit: str = 'DKK'

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FinancialAlert':
        return cls(
            id=_text(data.get('id')),
            label=_text(_get(data, 'label', 'id')),
            description=_text(data.get('description')),
            value=_number_or_none(data.get('value')),
            unit=_text(data.get('unit')) or 'DKK',
        )


@dataclass(frozen=True)
class FinancialSummary:
    latest_year: Optional[int] = None
    gross_profit: Optional[float] = None
    profit_after_tax: Optional[float] = None
    yoy_gross_change: Optional[float] = None
    yoy_profit_change: Optional[float] = None
    dso: Optional[float] = None
    liquidity: Optional[float] = None
    intercompany_loans: Optional[float] = None
    alerts: Tuple[FinancialAlert, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FinancialSummary':
        year = _number_or_none(_get(data, 'latestYear', 'latest_year'))
        return cls(
            latest_year=int(year) if year is not None else None,
            gross_profit=_number_or_none(_get(data, 'grossProfit', 'gross_profit')),
            profit_after_tax=_number_or_none(_get(data, 'profitAfterTax', 'profit_after_tax')),
            yoy_gross_change=_number_or_none(_get(data, 'yoyGrossChange', 'yoy_gross_change')),
            yoy_profit_change=_number_or_none(_get(data, 'yoyProfitChange', 'yoy_profit_change')),
            dso=_number_or_none(data.get('dso')),
            liquidity=_number_or_none(data.get('liquidity')),
            intercompany_loans=_number_or_none(_get(data, 'intercompanyLoans', 'intercompany_loans')),
            alerts=tuple(FinancialAlert.from_dict(a) for a in _records(data.get('alerts'))),
        )


# ─── Risk ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RiskScore:
    category: str
    risk_level: str = 'n/a'
    justification: str = ''

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RiskScore':
        return cls(
            category=_text(data.get('category')),
            risk_level=normalize_risk_level(_get(data, 'riskLevel', 'risk_level')),
            justification=_text(data.get('justification')),
        )


@dataclass(frozen=True)
class RedFlag:
    id: str
    label: str
    description: str = ''
    value: Optional[float] = None
    unit: str = 'DKK'

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RedFlag':
        return cls(
            id=_text(data.get('id')),
            label=_text(_get(data, 'label', 'id')),
            description=_text(data.get('description')),
            value=_number_or_none(data.get('value')),
            unit=_text(data.get('unit')) or 'DKK',
        )


@dataclass(frozen=True)
class RiskSummary:
    sector_risk_summary: str = ''
    compliance_issue: str = ''
    tax_case_exposure: Optional[float] = None
    risk_scores: Tuple[RiskScore, ...] = ()
    red_flags: Tuple[RedFlag, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RiskSummary':
        return cls(
            sector_risk_summary=_text(_get(data, 'sectorRiskSummary', 'sector_risk_summary')),
            compliance_issue=_text(_get(data, 'complianceIssue', 'compliance_issue')),
            tax_case_exposure=_number_or_none(_get(data, 'taxCaseExposure', 'tax_case_exposure')),
            risk_scores=tuple(RiskScore.from_dict(r) for r in _records(_get(data, 'riskScores', 'risk_scores'))),
            red_flags=tuple(RedFlag.from_dict(r) for r in _records(_get(data, 'redFlags', 'red_flags'))),
        )


# ─── Actions ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ActionItem:
    title: str
    description: Optional[str] = None
    priority: Optional[str] = None
    owner_role: Optional[str] = None
    time_horizon: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ActionItem':
        return cls(
            title=_text(data.get('title')),
            description=_optional_text(data.get('description')),
            priority=_optional_text(data.get('priority')),
            owner_role=_optional_text(_get(data, 'ownerRole', 'owner_role')),
            time_horizon=_optional_text(_get(data, 'timeHorizon', 'time_horizon')),
            date=_optional_text(_get(data, 'date', 'dueDate', 'due_date')),
        )


@dataclass(frozen=True)
class TimelineEvent:
    date: str
    title: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'TimelineEvent':
        return cls(
            date=_text(data.get('date')),
            title=_text(data.get('title')),
            description=_optional_text(data.get('description')),
        )


@dataclass(frozen=True)
class ActionSummary:
    upcoming_deadlines: Tuple[ActionItem, ...] = ()
    board_actionables: Tuple[ActionItem, ...] = ()
    critical_events: Tuple[TimelineEvent, ...] = ()
    upcoming_events: Tuple[TimelineEvent, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ActionSummary':
        return cls(
            upcoming_deadlines=tuple(
                ActionItem.from_dict(a) for a in _records(_get(data, 'upcomingDeadlines', 'upcoming_deadlines'))
            ),
            board_actionables=tuple(
                ActionItem.from_dict(a) for a in _records(_get(data, 'boardActionables', 'board_actionables'))
            ),
            critical_events=tuple(
                TimelineEvent.from_dict(e) for e in _records(_get(data, 'criticalEvents', 'critical_events'))
            ),
            upcoming_events=tuple(
                TimelineEvent.from_dict(e) for e in _records(_get(data, 'upcomingEvents', 'upcoming_events'))
            ),
        )


@dataclass(frozen=True)
class ReportPayload:
    financial: FinancialSummary = field(default_factory=FinancialSummary)
    risk: RiskSummary = field(default_factory=RiskSummary)
    actions: ActionSummary = field(default_factory=ActionSummary)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ReportPayload':
        if not isinstance(data, Mapping):
            raise InvalidPayload('Report payload must be a mapping.')
        return cls(
            financial=FinancialSummary.from_dict(_section(data, 'financial')),
            risk=RiskSummary.from_dict(_section(data, 'risk')),
            actions=ActionSummary.from_dict(_section(data, 'actions')),
        )


# ─── Metadata and charts ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ReportMetadata:
    case_id: str
    case_name: str
    subject: str
    exported_at: str
    report_version: str = DEFAULT_REPORT_VERSION
    exported_by: Optional[str] = None

    @property
    def export_date(self) -> str:
        """The ``YYYY-MM-DD`` prefix of the export timestamp."""
        return self.exported_at[:10]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_version: str = DEFAULT_REPORT_VERSION) -> 'ReportMetadata':
        if not isinstance(data, Mapping):
            raise InvalidPayload('Report metadata must be a mapping.')
        return build_report_metadata(
            case_id=_get(data, 'caseId', 'case_id', default=''),
            case_name=_get(data, 'caseName', 'case_name', default=''),
            subject=data.get('subject', ''),
            exported_by=_get(data, 'exportedBy', 'exported_by'),
            exported_at=_get(data, 'exportedAt', 'exported_at', 'generatedAt'),
            report_version=_get(data, 'reportVersion', 'report_version'),
            default_version=default_version,
        )


def build_report_metadata(
    case_id: Any,
    case_name: Any = '',
    subject: Any = '',
    exported_by: Any = None,
    exported_at: Any = None,
    report_version: Any = None,
    default_version: str = DEFAULT_REPORT_VERSION,
) -> ReportMetadata:
    case_id = _text(case_id)
    if not case_id:
        raise InvalidPayload('Report metadata requires a case id.')
    timestamp = _iso_timestamp(exported_at) if exported_at else datetime.now().replace(microsecond=0).isoformat()
    return ReportMetadata(
        case_id=case_id,
        case_name=_text(case_name) or case_id,
        subject=_text(subject) or case_id,
        exported_at=timestamp,
        report_version=_text(report_version) or default_version,
        exported_by=_optional_text(exported_by),
    )


@dataclass(frozen=True)
class ChartImage:
    title: str
    data: bytes = b''
    width: int = 0
    height: int = 0

    @property
    def is_drawable(self) -> bool:
        return bool(self.data) and self.width > 0 and self.height > 0

    @classmethod
    def from_file(cls, title: str, path: str) -> 'ChartImage':
        with open(path, 'rb') as f:
            data = f.read()
        with Image.open(path) as img:
            width, height = img.size
        return cls(title=title, data=data, width=int(width), height=int(height))
