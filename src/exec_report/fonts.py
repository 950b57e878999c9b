"""Font registration for the executive report."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from reportlab.pdfbase.pdfmetrics import registerFont, registerFontFamily
from reportlab.pdfbase.ttfonts import TTFont

log = logging.getLogger(__name__)

INTER_FILES = {
    'Inter': 'Inter-Regular.ttf',
    'Inter-Bold': 'Inter-Bold.ttf',
}


@dataclass(frozen=True)
class FontSet:
    regular: str = 'Helvetica'
    bold: str = 'Helvetica-Bold'


DEFAULT_FONTS = FontSet()


def register_fonts(font_dir: Optional[str] = None) -> FontSet:
    """Register the Inter TTF family. Falls back to Helvetica if not found."""
    if not font_dir:
        return DEFAULT_FONTS

    font_dir = os.path.normpath(font_dir)
    regular = os.path.join(font_dir, INTER_FILES['Inter'])
    if not os.path.exists(regular):
        log.info('Inter not found at %s, using Helvetica', regular)
        return DEFAULT_FONTS

    registerFont(TTFont('Inter', regular))
    bold = os.path.join(font_dir, INTER_FILES['Inter-Bold'])
    # Bold falls back to the regular face
    registerFont(TTFont('Inter-Bold', bold if os.path.exists(bold) else regular))
    registerFontFamily(
        'Inter',
        normal='Inter',
        bold='Inter-Bold',
        italic='Inter',
        boldItalic='Inter-Bold',
    )
    log.info('Registered Inter fonts from %s', font_dir)
    return FontSet(regular='Inter', bold='Inter-Bold')
