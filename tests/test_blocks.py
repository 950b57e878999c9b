import random

import pytest

from exec_report.blocks import (
    MetricCell, RenderContext, RenderMode,
    render_bullet_list, render_card_heading, render_chart_image, render_key_figure,
    render_metric_grid, render_paragraph, render_risk_rows, render_section_label,
)
from exec_report.design_tokens import (
    BADGE_PADDING, BADGE_SIZE, BODY_LEADING, BODY_SIZE, BULLET_INDENT, BULLET_LEADING, CARD_TITLE_LEADING,
    CHART_MAX_HEIGHT, ITEM_GAP, METRIC_ROW_HEIGHT, RISK_ROW_SPACING, RISK_TEXT_OFFSET,
)
from exec_report.labels import ReportLabels
from exec_report.payload import ChartImage, RiskScore

WORDS = (
    'liquidity covenant board filing deadline margin exposure auditor '
    'intercompany receivable forecast subsidiary governance restructuring '
    'a of to in DKK 2025 Q4'
).split()


def _sentence(rng, max_words=60):
    return ' '.join(rng.choice(WORDS) for _ in range(rng.randint(1, max_words)))


def _ctx(surface, width=300.0):
    return RenderContext(surface, x=40.0, y=60.0, width=width)


def _measure_then_draw(surface, render, *args, width=300.0):
    ctx = _ctx(surface, width)
    measured = render(RenderMode.MEASURE, ctx, *args)
    assert surface.ink == []
    drawn = render(RenderMode.DRAW, ctx, *args)
    return measured, drawn


def test_measure_equals_draw_for_random_text(surface):
    rng = random.Random(20251130)
    labels = ReportLabels()
    for _ in range(25):
        width = rng.uniform(120, 480)
        items = [_sentence(rng) for _ in range(rng.randint(0, 6))]
        risks = [
            RiskScore(_sentence(rng, 3), rng.choice(['critical', 'high', 'medium', 'low', 'n/a']), _sentence(rng))
            for _ in range(rng.randint(0, 4))
        ]
        cases = [
            (render_card_heading, (_sentence(rng, 5),)),
            (render_section_label, (_sentence(rng, 4),)),
            (render_paragraph, (_sentence(rng, 120),)),
            (render_key_figure, ('Tax case exposure', 'DKK 1.200.000')),
            (render_bullet_list, (items,)),
            (render_metric_grid, ([MetricCell('Gross profit', 'DKK 1')] * rng.randint(0, 9),)),
            (render_risk_rows, (risks, labels)),
        ]
        for render, args in cases:
            surface.ink.clear()
            measured, drawn = _measure_then_draw(surface, render, *args, width=width)
            assert measured == drawn, render.__name__


def test_measure_mode_never_draws(surface, make_png):
    ctx = _ctx(surface)
    chart = ChartImage('Trend', make_png(400, 200), 400, 200)
    render_card_heading(RenderMode.MEASURE, ctx, 'Financial Overview')
    render_paragraph(RenderMode.MEASURE, ctx, 'Some text ' * 40)
    render_bullet_list(RenderMode.MEASURE, ctx, ['one', 'two'])
    render_risk_rows(RenderMode.MEASURE, ctx, [RiskScore('Legal', 'high', 'Pending case.')], ReportLabels())
    render_chart_image(RenderMode.MEASURE, ctx, chart)
    assert surface.ink == []


def test_card_heading_height():
    assert render_card_heading(RenderMode.MEASURE, _ctx(None), 'Anything') == CARD_TITLE_LEADING


def test_empty_section_label_takes_no_space(surface):
    assert render_section_label(RenderMode.DRAW, _ctx(surface), '') == 0
    assert surface.ink == []


def test_empty_bullet_list_takes_no_space(surface):
    assert render_bullet_list(RenderMode.DRAW, _ctx(surface), []) == 0
    assert render_bullet_list(RenderMode.DRAW, _ctx(surface), ['', '']) == 0
    assert surface.ink == []


def test_bullet_list_height_follows_wrapping(surface):
    items = ['Short item', 'A much longer item that will have to wrap ' * 4]
    ctx = _ctx(surface, 250)
    expected = sum(
        len(surface.measure_wrapped_lines(item, 250 - BULLET_INDENT, ctx.fonts.regular, BODY_SIZE)) * BULLET_LEADING
        + ITEM_GAP
        for item in items
    )
    assert render_bullet_list(RenderMode.MEASURE, ctx, items) == expected
    assert expected > 2 * (BULLET_LEADING + ITEM_GAP)


def test_metric_grid_rows():
    metrics = [MetricCell(f'm{i}', str(i)) for i in range(7)]
    assert render_metric_grid(RenderMode.MEASURE, _ctx(None), metrics) == 4 * METRIC_ROW_HEIGHT
    assert render_metric_grid(RenderMode.MEASURE, _ctx(None), metrics[:2]) == METRIC_ROW_HEIGHT
    assert render_metric_grid(RenderMode.MEASURE, _ctx(None), []) == 0


def test_paragraph_height(surface):
    ctx = _ctx(surface, 200)
    text = 'Stable development within the transport sector ' * 3
    lines = surface.measure_wrapped_lines(text, 200, ctx.fonts.regular, BODY_SIZE)
    assert render_paragraph(RenderMode.MEASURE, ctx, text) == len(lines) * BODY_LEADING
    assert render_paragraph(RenderMode.MEASURE, ctx, '') == 0


def test_risk_row_counts_category_line(surface):
    ctx = _ctx(surface, 300)
    risk = RiskScore('Financial', 'high', 'Negative equity.')
    height = render_risk_rows(RenderMode.MEASURE, ctx, [risk], ReportLabels())
    assert height == 2 * BODY_LEADING + 6 + RISK_ROW_SPACING


def test_risk_row_justification_wraps_in_text_column(surface):
    ctx = _ctx(surface, 300)
    text = 'Repeated late filings and an open dispute with the tax authority ' * 3
    lines = surface.measure_wrapped_lines(text, 300 - RISK_TEXT_OFFSET, ctx.fonts.regular, BODY_SIZE)
    height = render_risk_rows(RenderMode.MEASURE, ctx, [RiskScore('Tax', 'critical', text)], ReportLabels())
    assert height == (1 + len(lines)) * BODY_LEADING + 6 + RISK_ROW_SPACING


def test_risk_rows_draw_level_label(surface):
    render_risk_rows(RenderMode.DRAW, _ctx(surface), [RiskScore('Tax', 'critical', 'Open case.')], ReportLabels())
    texts = [value for kind, value in surface.ink if kind == 'text']
    assert 'Critical' in texts
    assert 'Tax' in texts


def test_chart_height_from_aspect_ratio(surface, make_png):
    chart = ChartImage('Trend', make_png(800, 200), 800, 200)
    measured, drawn = _measure_then_draw(surface, render_chart_image, chart, width=400)
    assert measured == drawn == pytest.approx(100.0)


def test_chart_height_is_capped(surface, make_png):
    chart = ChartImage('Tall', make_png(100, 400), 100, 400)
    measured, drawn = _measure_then_draw(surface, render_chart_image, chart, width=400)
    assert measured == drawn == CHART_MAX_HEIGHT
    _, (x, y, width, height) = [entry for entry in surface.ink if entry[0] == 'image'][0]
    # narrowed to keep the aspect ratio, centred in the column
    assert height == CHART_MAX_HEIGHT
    assert width == pytest.approx(60.0)
    assert x == pytest.approx(40.0 + (400 - 60) / 2)


@pytest.mark.parametrize('chart', [
    ChartImage('No data'),
    ChartImage('Zero width', b'not-an-image', 0, 100),
    ChartImage('Zero height', b'not-an-image', 100, 0),
])
def test_chart_without_usable_image_takes_no_space(surface, chart):
    assert render_chart_image(RenderMode.DRAW, _ctx(surface), chart) == 0
    assert surface.ink == []


def test_long_risk_level_label_shrinks_to_fit_badge(surface):
    labels = ReportLabels(risk_level_critical='Kritisk risikoniveau')
    ctx = _ctx(surface)
    render_risk_rows(RenderMode.DRAW, ctx, [RiskScore('Tax', 'critical', 'Open case.')], labels)

    badge_width = [value for kind, value in surface.ink if kind == 'rect'][0][2]
    size = surface.sizes['Kritisk risikoniveau']
    assert size < BADGE_SIZE
    assert badge_width <= RISK_TEXT_OFFSET
    assert surface.text_width('Kritisk risikoniveau', ctx.fonts.bold, size) + BADGE_PADDING <= badge_width + 1e-6


def test_short_risk_level_label_keeps_badge_size(surface):
    render_risk_rows(RenderMode.DRAW, _ctx(surface), [RiskScore('Tax', 'low', 'Fine.')], ReportLabels())
    assert surface.sizes['Low'] == BADGE_SIZE
