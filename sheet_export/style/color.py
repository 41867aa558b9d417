"""CSS color parsing for backends that need channel values."""

import re
from typing import NamedTuple


class RGBA(NamedTuple):
    """Color channels, 0-255 for RGB and 0.0-1.0 for alpha."""

    r: int
    g: int
    b: int
    a: float = 1.0


NAMED_COLORS: dict[str, RGBA] = {
    "transparent": RGBA(0, 0, 0, 0.0),
    "black": RGBA(0, 0, 0),
    "white": RGBA(255, 255, 255),
    "red": RGBA(255, 0, 0),
    "green": RGBA(0, 128, 0),
    "blue": RGBA(0, 0, 255),
    "yellow": RGBA(255, 255, 0),
    "orange": RGBA(255, 165, 0),
    "purple": RGBA(128, 0, 128),
    "pink": RGBA(255, 192, 203),
    "gray": RGBA(128, 128, 128),
    "grey": RGBA(128, 128, 128),
}

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_RE = re.compile(r"^rgba?\(\s*(.*?)\s*\)$", re.IGNORECASE)


def _channel(token: str) -> int | None:
    try:
        if token.endswith("%"):
            value = float(token[:-1]) * 255 / 100
        else:
            value = float(token)
    except ValueError:
        return None
    return max(0, min(255, int(value + 0.5)))


def _alpha(token: str) -> float | None:
    try:
        if token.endswith("%"):
            value = float(token[:-1]) / 100
        else:
            value = float(token)
    except ValueError:
        return None
    return max(0.0, min(1.0, value))


def _parse_hex(digits: str) -> RGBA:
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return RGBA(r, g, b, a)


def _parse_function(body: str) -> RGBA | None:
    if "," in body:
        tokens = [t.strip() for t in body.split(",")]
    else:
        # Space syntax: "255 0 0 / 50%"
        color_part, _, alpha_part = body.partition("/")
        tokens = color_part.split()
        if alpha_part.strip():
            tokens.append(alpha_part.strip())

    if len(tokens) not in (3, 4):
        return None

    channels = [_channel(t) for t in tokens[:3]]
    if any(c is None for c in channels):
        return None

    alpha = 1.0
    if len(tokens) == 4:
        parsed = _alpha(tokens[3])
        if parsed is None:
            return None
        alpha = parsed

    return RGBA(channels[0], channels[1], channels[2], alpha)


def parse_color(value: object) -> RGBA | None:
    """Parse a CSS color string.

    Understands ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()`` and
    ``rgba()`` (comma or space separated, numeric or percentage alpha) and a
    small named palette.

    Args:
        value: Candidate color, usually a string from a style map.

    Returns:
        RGBA channels, or None if the value is not a recognized color.

    Example:
        >>> parse_color("rgba(255, 0, 0, 0.5)")
        RGBA(r=255, g=0, b=0, a=0.5)
    """
    if not isinstance(value, str):
        return None
    text = value.strip()

    match = _HEX_RE.match(text)
    if match:
        return _parse_hex(match.group(1))

    match = _FUNC_RE.match(text)
    if match:
        return _parse_function(match.group(1))

    return NAMED_COLORS.get(text.lower())


def alpha_byte(alpha: float) -> int:
    """Convert a 0.0-1.0 alpha to 0-255, rounding half up."""
    return max(0, min(255, int(alpha * 255 + 0.5)))


def to_hex(color: RGBA, include_alpha: bool = False) -> str:
    """Format as ``#RRGGBB`` (or ``#RRGGBBAA``), upper-case."""
    text = f"#{color.r:02X}{color.g:02X}{color.b:02X}"
    if include_alpha:
        text += f"{alpha_byte(color.a):02X}"
    return text


def to_argb_hex(color: RGBA) -> str:
    """Format as ``0xAARRGGBB``, the layout Flutter's Color() expects."""
    return f"0x{alpha_byte(color.a):02X}{color.r:02X}{color.g:02X}{color.b:02X}"
