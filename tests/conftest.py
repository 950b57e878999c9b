import io
import logging

import pytest
from PIL import Image

from exec_report.payload import (
    ActionItem, ActionSummary, ChartImage, FinancialSummary, ReportPayload,
    RiskScore, RiskSummary, TimelineEvent, build_report_metadata,
)
from exec_report.surface import PageSurface


class RecordingSurface(PageSurface):
    """PageSurface that records every call that puts ink on a page."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.ink = []
        self.sizes = {}

    def draw_text(self, text, *args, **kwargs):
        self.ink.append(('text', text))
        self.sizes[text] = args[3] if len(args) > 3 else kwargs.get('size')
        super().draw_text(text, *args, **kwargs)

    def draw_rect(self, *args, **kwargs):
        self.ink.append(('rect', args[:4]))
        super().draw_rect(*args, **kwargs)

    def draw_line(self, *args, **kwargs):
        self.ink.append(('line', args[:4]))
        super().draw_line(*args, **kwargs)

    def draw_image(self, data, *args, **kwargs):
        self.ink.append(('image', args[:4]))
        super().draw_image(data, *args, **kwargs)

    def fill_page(self, color):
        self.ink.append(('page', color))
        super().fill_page(color)


def _png(width=1200, height=300, color=(15, 23, 42)) -> bytes:
    buf = io.BytesIO()
    Image.new('RGB', (width, height), color=color).save(buf, format='PNG')
    return buf.getvalue()


@pytest.fixture(autouse=True)
def detach_report_handlers():
    """The CLI attaches a stderr handler bound to the capture stream of its test."""
    yield
    logger = logging.getLogger('exec_report')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def make_png():
    return _png


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def png_chart():
    return ChartImage(title='Gross profit trend', data=_png(1200, 300), width=1200, height=300)


@pytest.fixture
def metadata():
    return build_report_metadata(
        case_id='tsl-001',
        case_name='TS Logistik ApS',
        subject='tsl',
        exported_at='2025-11-30T10:00:00Z',
        report_version='v2',
        exported_by='analyst@example.com',
    )


def _deadline(n):
    return ActionItem(
        title=f'Submit filing {n}',
        description='File the corrected annual statement with the business authority before the deadline.',
        priority='High',
        owner_role='CFO',
        time_horizon='0-30 days',
        date='2025-12-15',
    )


@pytest.fixture
def scenario_payload():
    """7 metrics, no alerts, 3 risk scores, 5 deadlines and 2 board items."""
    return ReportPayload(
        financial=FinancialSummary(
            latest_year=2024,
            gross_profit=12_000_000,
            profit_after_tax=4_200_000,
            yoy_gross_change=3.2,
            yoy_profit_change=-1.1,
            dso=48,
            liquidity=1_800_000,
            intercompany_loans=900_000,
        ),
        risk=RiskSummary(
            sector_risk_summary=(
                'Stable development within the transport sector, with moderate pressure on margins '
                'from fuel prices and wages. Competitors are consolidating and the customer base is '
                'concentrated on a handful of large accounts, which keeps counterparty exposure high.'
            ),
            compliance_issue='No critical registrations.',
            tax_case_exposure=None,
            risk_scores=(
                RiskScore('Financial', 'high', 'Low risk.'),
                RiskScore('Governance', 'medium', 'Low risk.'),
                RiskScore('Legal/Compliance', 'low', 'Low risk.'),
            ),
        ),
        actions=ActionSummary(
            upcoming_deadlines=tuple(_deadline(n) for n in range(1, 6)),
            board_actionables=(
                ActionItem(title='Approve liquidity plan', priority='Required', owner_role='Board'),
                ActionItem(title='Review intercompany loans', description='Assess repayment terms.'),
            ),
        ),
    )


@pytest.fixture
def empty_actions_payload(scenario_payload):
    return ReportPayload(
        financial=scenario_payload.financial,
        risk=scenario_payload.risk,
        actions=ActionSummary(
            critical_events=(TimelineEvent('2025-12-01', 'Bank covenant review'),),
        ),
    )
