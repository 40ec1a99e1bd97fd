# navtemplate/colors.py
import re
from dataclasses import dataclass

_EDGES = re.compile(r"^[^0-9A-Za-z]+|[^0-9A-Za-z]+$")
_HEX = re.compile(r"[0-9A-Fa-f]+")


@dataclass(frozen=True)
class Color:
    """An sRGB color. Components are floats in [0, 1]."""
    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_hex(cls, text: str) -> 'Color':
        """
        Parse ``"#RRGGBB"``, ``"RRGGBB"`` or the short ``"#RGB"`` form.

        Anything that is not 3 or 6 hex digits yields black.
        """
        digits = _EDGES.sub("", text or "")
        if not _HEX.fullmatch(digits):
            return BLACK
        value = int(digits, 16)
        if len(digits) == 3:
            return cls(((value >> 8) * 17) / 255.0,
                       ((value >> 4 & 0xF) * 17) / 255.0,
                       ((value & 0xF) * 17) / 255.0)
        if len(digits) == 6:
            return cls((value >> 16) / 255.0,
                       ((value >> 8) & 0xFF) / 255.0,
                       (value & 0xFF) / 255.0)
        return BLACK

    def with_opacity(self, opacity: float) -> 'Color':
        return Color(self.r, self.g, self.b, opacity)

    def to_css(self) -> str:
        return (f"rgba({round(self.r * 255)}, {round(self.g * 255)}, "
                f"{round(self.b * 255)}, {self.a:g})")

    def to_tuple(self):
        return (self.r, self.g, self.b, self.a)


BLACK = Color(0.0, 0.0, 0.0)


class Colors:
    """Named colors used by the app's asset catalog."""
    accent = Color.from_hex("#E8A33D")
    tertiary = Color.from_hex("#8E8E93")
    side_sheet_bg = Color.from_hex("#1C1C1E")
    bottom_sheet_border_middle = Color.from_hex("#FFFFFF").with_opacity(0.35)
