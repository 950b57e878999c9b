"""
Executive Summary PDF Generator

Renders the executive summary of a case into a multi-page PDF: financial and
risk cards side by side, the action radar across the full width, then chart
snapshots two per row. Page footers carry export date, subject and
"page X of Y".

Usage: python3 -m exec_report <input.json> <output_dir> [--chart TITLE=PATH ...]
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .cards import Card, actions_card, chart_card, financial_card, risk_card
from .config import LoggerConfig, ReportSettings, configure_logging
from .errors import InvalidPayload, ReportError, RowOverflow
from .fonts import register_fonts
from .formatters import format_date
from .labels import ReportLabels
from .layout import LayoutEngine, RowPlacement
from .payload import ChartImage, ReportMetadata, ReportPayload
from .surface import PageSurface

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportResult:
    content: bytes
    filename: str
    page_count: int
    page_breaks: int
    rows: Tuple[RowPlacement, ...]
    overflows: Tuple[RowOverflow, ...]


# ─── Assembly ────────────────────────────────────────────────────────────────

def _chunk(items, size):
    return [items[i:i + size] for i in range(0, len(items), size)]


def build_card_rows(
    payload: ReportPayload,
    charts: Sequence[ChartImage] = (),
    labels: Optional[ReportLabels] = None,
) -> List[List[Card]]:
    """Financial + risk, then actions alone, then charts two per row."""
    labels = labels or ReportLabels()
    rows: List[List[Card]] = [
        [financial_card(payload.financial, labels), risk_card(payload.risk, labels)],
        [actions_card(payload.actions, labels)],
    ]

    drawable = []
    for chart in charts:
        if chart.is_drawable:
            drawable.append(chart_card(chart))
        else:
            log.info('Skipping chart %r: no image data or zero size', chart.title)
    rows.extend(_chunk(drawable, 2))
    return rows


def build_report_filename(metadata: ReportMetadata, ext: str = 'pdf') -> str:
    case_slug = metadata.case_id.upper()
    return f'{case_slug}_ExecutiveSummary_{metadata.report_version}_{metadata.export_date}.{ext}'


# ─── Main PDF builder ────────────────────────────────────────────────────────

def generate_report(
    payload: ReportPayload,
    metadata: ReportMetadata,
    charts: Sequence[ChartImage] = (),
    labels: Optional[ReportLabels] = None,
    settings: Optional[ReportSettings] = None,
) -> ReportResult:
    """Lay out the whole report and return the PDF bytes.

    Raises InvalidPayload before anything is drawn, and EncodingError when the
    drawing surface rejects content. No bytes are produced on failure.
    """
    if not isinstance(metadata, ReportMetadata) or not metadata.case_id.strip():
        raise InvalidPayload('Report metadata with a case id is required.')
    if not isinstance(payload, ReportPayload):
        raise InvalidPayload('Report payload is required.')

    settings = settings or ReportSettings()
    labels = labels or ReportLabels()
    fonts = register_fonts(settings.font_dir)
    rows = build_card_rows(payload, charts, labels)

    surface = PageSurface()
    engine = LayoutEngine(surface, fonts)
    engine.start()

    generated = format_date(metadata.exported_at, labels)
    engine.draw_header(labels.page_title, [
        labels.subject_line.format(subject=metadata.subject.upper()),
        labels.generated_line.format(date=generated),
    ])
    placements = engine.layout_rows(rows)
    engine.apply_footer(
        labels.footer_meta.format(date=generated, subject=metadata.subject.upper()),
        lambda current, total: labels.footer_page.format(current=current, total=total),
    )

    surface.set_document_info(
        title=f'{labels.page_title} · {metadata.case_name}',
        subject=metadata.subject,
        author=metadata.exported_by,
    )
    page_count = surface.page_count()
    content = surface.save()

    filename = build_report_filename(metadata, settings.file_extension)
    log.info('Executive report generated: %s (pages=%d, rows=%d, bytes=%d)',
             filename, page_count, len(placements), len(content))
    return ReportResult(
        content=content,
        filename=filename,
        page_count=page_count,
        page_breaks=engine.page_breaks,
        rows=tuple(placements),
        overflows=tuple(engine.overflows),
    )


def write_report(result: ReportResult, output_dir: str) -> str:
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, result.filename)
    with open(path, 'wb') as f:
        f.write(result.content)
    return path


# ─── CLI entry point ─────────────────────────────────────────────────────────

def _parse_chart(value: str) -> Tuple[str, str]:
    title, sep, path = value.partition('=')
    if not sep or not title.strip() or not path.strip():
        raise argparse.ArgumentTypeError(f'expected TITLE=PATH, got {value!r}')
    return title.strip(), path.strip()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='exec_report', description='Render an executive summary PDF.')
    parser.add_argument('input', help='JSON file with "metadata", "payload" and optional "labels"')
    parser.add_argument('output_dir', help='directory the PDF is written to')
    parser.add_argument('--chart', action='append', default=[], type=_parse_chart,
                        metavar='TITLE=PATH', help='chart image to append (repeatable)')
    args = parser.parse_args(argv)

    settings = ReportSettings.from_env()
    configure_logging(LoggerConfig(level=settings.log_level, console=True))

    try:
        with open(args.input, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise InvalidPayload('Input file must hold a JSON object.')
        metadata = ReportMetadata.from_dict(data.get('metadata') or {}, settings.default_report_version)
        payload = ReportPayload.from_dict(data.get('payload') or {})
        labels = ReportLabels.from_dict(data.get('labels') or {})
        charts = [ChartImage.from_file(title, path) for title, path in args.chart]
        result = generate_report(payload, metadata, charts, labels=labels, settings=settings)
        path = write_report(result, args.output_dir)
    except (OSError, ValueError, ReportError) as exc:
        log.error('Report generation failed: %s', exc)
        return 1

    print(path)
    return 0
