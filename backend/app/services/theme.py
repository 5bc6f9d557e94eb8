"""Theme variables derived from a single stored accent color.

Hover/active are plain per-channel brightening (no HSL conversion). Foreground
is black or white by relative luminance. Malformed accents pass through as-is.
"""

from app.schemas.page_config import HEX_COLOR_RE
from app.schemas.theme import ThemeVariables

HOVER_DELTA = 20
ACTIVE_DELTA = 40
LUMINANCE_THRESHOLD = 0.5

BLACK = "#000000"
WHITE = "#ffffff"


def _parse_hex(color: str) -> tuple[int, int, int]:
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def _to_hex(rgb: tuple[int, int, int]) -> str:
    return "#" + "".join(f"{channel:02x}" for channel in rgb)


def brighten(color: str, delta: int) -> str:
    """Add ``delta`` to each channel of a #RRGGBB color, clamped to [0, 255]."""
    rgb = _parse_hex(color)
    return _to_hex(tuple(max(0, min(255, channel + delta)) for channel in rgb))


def relative_luminance(color: str) -> float:
    """0.299R + 0.587G + 0.114B, normalized to [0, 1]."""
    r, g, b = _parse_hex(color)
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def derive_theme(accent: str) -> ThemeVariables:
    if not isinstance(accent, str) or not HEX_COLOR_RE.fullmatch(accent):
        return ThemeVariables(accent=str(accent), hover=str(accent), active=str(accent))

    foreground = BLACK if relative_luminance(accent) > LUMINANCE_THRESHOLD else WHITE
    return ThemeVariables(
        accent=accent,
        hover=brighten(accent, HOVER_DELTA),
        active=brighten(accent, ACTIVE_DELTA),
        foreground=foreground,
    )
