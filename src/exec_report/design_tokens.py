"""Executive report design tokens for PDF generation."""

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4

# ─── Colors ──────────────────────────────────────────────────────────────────

PAGE_BACKGROUND = HexColor('#FAFAFA')
PAGE_HEADING    = HexColor('#1E293B')
TEXT_PRIMARY    = HexColor('#2D3748')
TEXT_SECONDARY  = HexColor('#58667E')
TEXT_MUTED      = HexColor('#95A2BC')
CARD_BACKGROUND = HexColor('#FFFFFF')
CARD_BORDER     = HexColor('#E5E7EB')

ACCENT_SOFT     = HexColor('#C4C9FD')
BULLET          = HexColor('#6366F1')
POSITIVE        = HexColor('#22C55E')
WARNING         = HexColor('#F59E0B')
NEGATIVE        = HexColor('#EF4444')

# Metric tone mapping
TONE_COLORS = {
    'positive': POSITIVE,
    'negative': NEGATIVE,
    'warning': WARNING,
    'neutral': PAGE_HEADING,
}

# Badge palette per risk level: (fill, text)
RISK_LEVEL_COLORS = {
    'critical': (HexColor('#DC2626'), HexColor('#FFFFFF')),
    'high':     (HexColor('#EAB308'), HexColor('#111827')),
    'medium':   (HexColor('#3B82F6'), HexColor('#FFFFFF')),
    'low':      (HexColor('#22C55E'), HexColor('#111827')),
    'n/a':      (HexColor('#94A3B8'), HexColor('#111827')),
}

# ─── Typography sizes (points) ───────────────────────────────────────────────

PAGE_TITLE_SIZE     = 24
PAGE_SUBTITLE_SIZE  = 11
CARD_TITLE_SIZE     = 13
SECTION_LABEL_SIZE  = 10
BODY_SIZE           = 10
METRIC_LABEL_SIZE   = 9
METRIC_VALUE_SIZE   = 16
KEY_FIGURE_SIZE     = 14
BADGE_SIZE          = 10
FOOTER_SIZE         = 9

CARD_TITLE_LEADING    = 26
SECTION_LABEL_LEADING = 18
BODY_LEADING          = 16
BULLET_LEADING        = 15

# ─── Page dimensions ─────────────────────────────────────────────────────────

PAGE_SIZE = A4

PAGE_MARGIN   = 54   # 0.75in

# Header block on the first page: title, subject line, generated line
HEADER_TITLE_GAP    = 32
HEADER_SUBJECT_GAP  = 16
HEADER_GENERATED_GAP = 26

# ─── Cards and rows ──────────────────────────────────────────────────────────

CARD_PADDING = 28
CARD_RADIUS  = 12
ROW_GAP      = 24
COLUMN_GAP   = 24

HEADING_RULE_WIDTH = 42

# ─── Blocks ──────────────────────────────────────────────────────────────────

METRIC_COLUMNS    = 2
METRIC_COLUMN_GAP = 22
METRIC_ROW_HEIGHT = 40

KEY_FIGURE_HEIGHT = 28
PARAGRAPH_GAP     = 6

BULLET_INDENT  = 14
ITEM_GAP       = 6

BADGE_HEIGHT      = 20
BADGE_MIN_WIDTH   = 52
BADGE_PADDING     = 18
BADGE_RADIUS      = 6
RISK_TEXT_OFFSET  = 100
RISK_ROW_SPACING  = 10

CHART_HEADING_GAP = 10
CHART_MAX_HEIGHT  = 240

# Glyphs available in the standard Type 1 encoding
ICON_BULLETS = {
    'default': '•',
    'deadline': '»',
    'board': '•',
    'critical': '!',
    'roadmap': '›',
}
