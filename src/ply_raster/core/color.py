"""Colour code parsing."""

from __future__ import annotations

import re
from typing import NamedTuple, Union

from ..exceptions import InvalidColorError

_SHORTHAND = re.compile(r"^[01]{1,3}$")
_HEX = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Color(NamedTuple):
    """RGB colour, one byte per channel."""

    r: int
    g: int
    b: int

    def rgba(self, alpha: int) -> tuple[int, int, int, int]:
        return self.r, self.g, self.b, alpha

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = Color(0, 0, 0)


def parse_color(value: Union[str, int, Color]) -> Color:
    """
    Parse a colour code.

    Accepts ``#rgb``/``#rrggbb`` hex codes or the 0/1 shorthand where the
    hundreds, tens and units digits switch red, green and blue fully on
    (``"110"`` is yellow, ``"1"`` is blue).

    Parameters
    ----------
    value : str, int or Color
        Colour code.

    Returns
    -------
    Color
        Parsed colour.
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, bool):
        raise InvalidColorError(f"Invalid colour: {value!r}")
    if isinstance(value, int):
        value = str(value)

    text = str(value).strip()

    if not text.startswith("#") and _SHORTHAND.match(text):
        digits = text.zfill(3)
        r, g, b = (255 if d == "1" else 0 for d in digits)
        return Color(r, g, b)

    match = _HEX.match(text)
    if match:
        code = match.group(1)
        if len(code) == 3:
            code = "".join(ch * 2 for ch in code)
        return Color(int(code[0:2], 16), int(code[2:4], 16), int(code[4:6], 16))

    raise InvalidColorError(
        f"Invalid colour {value!r}: use #rrggbb, #rgb or a 0/1 shorthand such as 110"
    )
