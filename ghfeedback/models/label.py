"""Issue label with presentation helpers."""

import re

from pydantic import BaseModel, ConfigDict

BUG_LABEL = "bug"
FEATURE_REQUEST_LABEL = "feature-request"
USER_SUBMITTED_LABEL = "user-submitted"

# Labels with a dedicated meaning; anything else is a triage label
TYPE_LABELS = frozenset({BUG_LABEL, FEATURE_REQUEST_LABEL, USER_SUBMITTED_LABEL})

_NON_HEX_RE = re.compile(r"[^0-9A-Za-z]")


def display_label_name(name: str) -> str:
    """Title-case a raw label name and turn hyphens into spaces.

    ``feature-request`` -> ``Feature Request``.
    """
    return " ".join(part.capitalize() for part in name.replace("-", " ").split(" "))


def parse_hex_colour(value: str) -> tuple[float, float, float, float]:
    """Parse a 3, 6 or 8 digit hex colour (RGB, RRGGBB, AARRGGBB).

    Returns (red, green, blue, alpha) as floats in [0, 1]. Any other length
    gives a near-black, near-transparent fallback.
    """
    digits = _NON_HEX_RE.sub("", value)
    try:
        n = int(digits, 16) if digits else 0
    except ValueError:
        n = 0
    if len(digits) == 3:
        a, r, g, b = 255, (n >> 8) * 17, (n >> 4 & 0xF) * 17, (n & 0xF) * 17
    elif len(digits) == 6:
        a, r, g, b = 255, n >> 16, n >> 8 & 0xFF, n & 0xFF
    elif len(digits) == 8:
        a, r, g, b = n >> 24, n >> 16 & 0xFF, n >> 8 & 0xFF, n & 0xFF
    else:
        a, r, g, b = 1, 1, 1, 0
    return (r / 255, g / 255, b / 255, a / 255)


class Label(BaseModel):
    """Label attached to an issue. ``color`` is hex without ``#``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    color: str = ""

    @property
    def display_name(self) -> str:
        """Name as shown to users, e.g. Feature Request."""
        return display_label_name(self.name)

    @property
    def rgba(self) -> tuple[float, float, float, float]:
        """Colour as (red, green, blue, alpha) floats."""
        return parse_hex_colour(self.color)

    def for_display(self) -> "Label":
        """Copy with the presentation name; the colour is kept."""
        return Label(name=self.display_name, color=self.color)
