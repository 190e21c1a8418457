"""Color helpers shared by brand extraction and deck assembly."""
import re
from typing import Optional, Tuple

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")
_SHORT_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3})$")


def normalize_color(color: str) -> Optional[str]:
    """Return `color` as lowercase #rrggbb, or None if it is not hex/rgb()."""
    if not color:
        return None
    color = color.strip()

    if color.lower().startswith("rgb"):
        parts = re.findall(r"\d+", color)
        if len(parts) < 3:
            return None
        r, g, b = (min(255, int(p)) for p in parts[:3])
        return f"#{r:02x}{g:02x}{b:02x}"

    m = _SHORT_HEX_RE.match(color)
    if m:
        short = m.group(1)
        return "#" + "".join(c * 2 for c in short).lower()

    m = _HEX_RE.match(color)
    if m:
        return "#" + m.group(1).lower()
    return None


def hex_to_rgb(hex_color: str) -> Optional[Tuple[int, int, int]]:
    m = _HEX_RE.match(hex_color or "")
    if not m:
        return None
    value = m.group(1)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def is_near_white_or_black(hex_color: str) -> bool:
    """Average channel below 30 or above 225."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return False
    brightness = sum(rgb) / 3
    return brightness < 30 or brightness > 225


def relative_luminance(hex_color: str) -> float:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return 0.0

    def _channel(value: int) -> float:
        v = value / 255
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    r, g, b = (_channel(v) for v in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color1: str, color2: str) -> float:
    """WCAG contrast ratio, 1.0 - 21.0."""
    l1 = relative_luminance(color1)
    l2 = relative_luminance(color2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def is_light_color(hex_color: str) -> bool:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return True
    r, g, b = rgb
    return (r * 299 + g * 587 + b * 114) / 1000 > 128
