"""Executive summary PDF report generator."""

from .errors import EncodingError, InvalidPayload, ReportError, RowOverflow
from .generator import ReportResult, build_card_rows, build_report_filename, generate_report, write_report
from .labels import ReportLabels
from .payload import ChartImage, ReportMetadata, ReportPayload, build_report_metadata

__all__ = [
    'ChartImage',
    'EncodingError',
    'InvalidPayload',
    'ReportError',
    'ReportLabels',
    'ReportMetadata',
    'ReportPayload',
    'ReportResult',
    'RowOverflow',
    'build_card_rows',
    'build_report_filename',
    'build_report_metadata',
    'generate_report',
    'write_report',
]
