"""Error types raised while generating an executive report."""

from __future__ import annotations

from dataclasses import dataclass


class ReportError(RuntimeError):
    """Raised when report generation cannot continue."""


class InvalidPayload(ReportError):
    """Raised when required report input is missing or malformed."""


class EncodingError(ReportError):
    """Raised when the drawing surface rejects an operation."""


@dataclass(frozen=True)
class RowOverflow:
    """A row whose measured height exceeds one page's printable area.

    The row is still drawn; this record only surfaces the condition.
    """

    row_index: int
    page: int
    height: float
    printable_height: float

    def describe(self) -> str:
        return (
            f"row {self.row_index} on page {self.page} is {self.height:.1f}pt tall, "
            f"printable area is {self.printable_height:.1f}pt"
        )
