"""
Locale-aware number rendering for every human-readable string the engine emits.

Display modes
-------------
auto / fixed (``fixo``)
  Magnitude decides the shape: ``|x| >= 1e6`` or ``|x| < 1e-4`` goes through
  the scientific renderer (3 digits), ``|x| >= 1`` gets 2 fixed decimals,
  anything smaller gets 4.  The result is then run through
  ``trim_decimal_comma()``: first ``.`` becomes ``,`` and trailing zeros are
  dropped.  The trim also applies to the scientific sub-path, so
  ``0.00005`` renders as ``"5,000e-5"`` and ``0`` as ``"0,000e+"``.

scientific (``cientifico``)
  ``toExponential``-shaped output (``"1.235e+6"``, ``"5.000e-5"``), never
  trimmed.

accounting (``contabilistico``)
  Two decimals with locale grouping, then ``swap_separators()`` exchanges
  the grouping and decimal marks.  For ``pt-BR`` the locale renders
  ``"1.234,50"`` and the final string is ``"1,234.50"``.

anything else
  Plain stringification (``"1234.5"``, ``"3"``).

Rounding is half-up on the exact binary value of the float, which is what
``Number.prototype.toFixed`` / ``toExponential`` do in the systems that
consume these strings.

Example::

    >>> format_number(1234.5, type="accounting")
    '1,234.50'
    >>> format_number(0.25, unit="kg")
    '0,25 kg'
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from functools import lru_cache
from typing import Any, Optional

from babel import Locale
from babel.numbers import format_decimal

NOT_AVAILABLE = "N/A"
DEFAULT_LOCALE = "pt-BR"
SCIENTIFIC_DIGITS = 3

FORMAT_ALIASES: dict[str, str] = {
    "contabilistico": "accounting",
    "cientifico":     "scientific",
    "fixo":           "fixed",
}
FORMAT_TYPES: frozenset[str] = frozenset(
    {"auto", "fixed", "scientific", "accounting"} | set(FORMAT_ALIASES)
)

_SCIENTIFIC_UPPER = 1e6
_SCIENTIFIC_LOWER = 1e-4
_ACCOUNTING_PATTERN = "#,##0.00"
_SWAP_SENTINEL = "|"
_TRAILING_ZEROS = re.compile(r",?0+$")


# ── Pipeline steps ────────────────────────────────────────────────────────────


def to_exponential(value: float, digits: int = SCIENTIFIC_DIGITS) -> str:
    """Render ``value`` in exponential notation with ``digits`` fraction digits.

    The exponent carries an explicit sign and no zero padding
    (``"1.000e+6"``, ``"5.000e-5"``, ``"0.000e+0"``).
    """
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        # Decimal zero keeps its exponent through "e" formatting
        return f"{0:.{digits}f}e+0"
    with localcontext() as ctx:
        ctx.rounding = ROUND_HALF_UP
        return format(Decimal(value), f".{digits}e")


def to_fixed(value: float, places: int) -> str:
    """Render ``value`` with exactly ``places`` fraction digits, half-up."""
    quantum = Decimal(1).scaleb(-places)
    return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP), "f")


def trim_decimal_comma(text: str) -> str:
    """Comma-decimal cleanup applied to auto/fixed output.

    Steps, in order: the first ``.`` becomes ``,``; the first match of
    ``,?0+$`` is removed; a single trailing ``,`` is removed.
    """
    text = text.replace(".", ",", 1)
    text = _TRAILING_ZEROS.sub("", text, count=1)
    if text.endswith(","):
        text = text[:-1]
    return text


def swap_separators(text: str) -> str:
    """Exchange ``.`` and ``,`` through a sentinel: ``"1.234,50"`` -> ``"1,234.50"``."""
    return (
        text.replace(".", _SWAP_SENTINEL)
        .replace(",", ".")
        .replace(_SWAP_SENTINEL, ",")
    )


def format_grouped(value: float, locale: str = DEFAULT_LOCALE) -> str:
    """Two-decimal, locale-grouped rendering (``1234.5`` -> ``"1.234,50"`` in pt-BR)."""
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    rounded = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return format_decimal(rounded, format=_ACCOUNTING_PATTERN, locale=_babel_locale(locale))


def plain_number(value: float) -> str:
    """Shortest round-trip string, integers without a fraction part."""
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    if -7 < exp < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{exp:+d}"


# ── Public entry point ────────────────────────────────────────────────────────


def format_number(
    x: Any,
    digits: Optional[int] = None,
    type: str = "auto",
    unit: Optional[str] = None,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Render a number for display.

    Args:
        x:      Value to render.  ``None``, NaN and non-numeric input give
                ``"N/A"``.
        digits: Fraction digits for ``type="scientific"`` (default 3).  The
                auto/fixed scientific sub-path always uses 3.
        type:   ``"auto"``, ``"fixed"``, ``"scientific"``, ``"accounting"``
                (or the Portuguese aliases).  Unknown types fall back to
                plain stringification.
        unit:   Optional suffix appended after a space.
        locale: Locale tag used by the accounting renderer.

    Returns:
        The formatted string.
    """
    if x is None:
        return NOT_AVAILABLE
    try:
        num = float(x)
    except (TypeError, ValueError):
        return NOT_AVAILABLE
    if math.isnan(num):
        return NOT_AVAILABLE

    mode = FORMAT_ALIASES.get(type, type)

    if mode == "accounting":
        formatted = swap_separators(format_grouped(num, locale))
    elif mode == "scientific":
        formatted = to_exponential(num, SCIENTIFIC_DIGITS if digits is None else digits)
    elif mode in ("auto", "fixed"):
        magnitude = abs(num)
        if magnitude >= _SCIENTIFIC_UPPER or magnitude < _SCIENTIFIC_LOWER:
            formatted = to_exponential(num, SCIENTIFIC_DIGITS)
        elif magnitude >= 1:
            formatted = to_fixed(num, 2)
        else:
            formatted = to_fixed(num, 4)
        formatted = trim_decimal_comma(formatted)
    else:
        formatted = plain_number(num)

    if unit:
        return f"{formatted} {unit}"
    return formatted


@lru_cache(maxsize=32)
def _babel_locale(tag: str) -> Locale:
    return Locale.parse(tag.replace("-", "_"))
