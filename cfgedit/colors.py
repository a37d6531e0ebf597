from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

COLOR_SUFFIXES = ("Color", "Colour", "color", "colour")

RGBA = Tuple[float, float, float, float]

@dataclass(frozen=True)
class ColorShape:
    unit: bool        # True: floats in [0, 1]; False: ints in [0, 255]
    channels: int     # 3 or 4

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

def _is_byte(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and 0 <= x <= 255

def _is_unit(x: Any) -> bool:
    return isinstance(x, float) and 0.0 <= x <= 1.0

def looks_like_color(name: str, value: Any) -> Optional[ColorShape]:
    if not isinstance(name, str) or not name.endswith(COLOR_SUFFIXES):
        return None
    if not isinstance(value, list) or len(value) not in (3, 4):
        return None
    if all(_is_byte(x) for x in value):
        return ColorShape(unit=False, channels=len(value))
    if all(_is_unit(x) for x in value):
        return ColorShape(unit=True, channels=len(value))
    return None

def to_rgba(value: Sequence[Any], shape: ColorShape) -> RGBA:
    comps = [float(x) if shape.unit else x / 255.0 for x in value[:shape.channels]]
    if len(comps) == 3:
        comps.append(1.0)  # display only, never written back
    return (comps[0], comps[1], comps[2], comps[3])

def _clamp_unit(c: float) -> float:
    return max(0.0, min(1.0, float(c)))

def from_rgba(rgba: Sequence[float], shape: ColorShape) -> List[Any]:
    comps = [_clamp_unit(c) for c in rgba[:shape.channels]]
    if shape.unit:
        return comps
    return [int(round(c * 255)) for c in comps]

# ---- hex helpers for the color chooser ----
def to_hex(rgba: Sequence[float]) -> str:
    r, g, b = (int(round(_clamp_unit(c) * 255)) for c in rgba[:3])
    return f"#{r:02x}{g:02x}{b:02x}"

def from_hex(text: str, alpha: float = 1.0) -> RGBA:
    s = text.lstrip("#")
    if len(s) != 6:
        raise ValueError(f"not a #rrggbb color: {text!r}")
    r, g, b = (int(s[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
    return (r, g, b, alpha)
