"""
Quantity/unit extraction for the head of an ingredient line.

Recognizes, in priority order:
1. a range ("2-3", "2 – 3", "1 to 2")
2. a mixed number ("1 1/2")
3. a vulgar fraction ("3/4")
4. a decimal or integer
5. a number word up to twelve ("two")

then tests the following token(s) against the unit alias table.
"""

import re
from typing import NamedTuple, Optional

from .lexicon import DEFAULT_LEXICON, Lexicon, UNICODE_FRACTIONS
from .parser import Quantity

_GLYPH_RE = re.compile(r"(?:(\d+)\s*)?([" + "".join(UNICODE_FRACTIONS) + r"])")

_NUM = r"(?:\d+\s+\d+/\d+|\d+/\d+|\d*\.\d+|\d+)"
_QTY_RE = re.compile(
    rf"^(?P<a>{_NUM})(?:\s*(?:-|–|to\b)\s*(?P<b>{_NUM}))?",
    re.IGNORECASE,
)
_TOKENS_RE = re.compile(r"\s*(\S+)(?:(\s+)(\S+))?")


class QuantityMatch(NamedTuple):
    quantity: Optional[Quantity]
    unit: Optional[str]
    consumed: int
    remainder: str


EMPTY_MATCH = QuantityMatch(None, None, 0, "")


def normalize_fractions(text: str) -> str:
    """Replace fraction glyphs with decimal strings, folding "1½" / "1 ½" into "1.5"."""
    def _fold(m: re.Match) -> str:
        value = UNICODE_FRACTIONS[m.group(2)]
        if m.group(1):
            value += int(m.group(1))
        return str(value)

    return _GLYPH_RE.sub(_fold, text)


def parse_number_token(token: str, lexicon: Lexicon = DEFAULT_LEXICON) -> Optional[float]:
    t = token.strip().lower()
    if not t:
        return None
    if t in lexicon.number_words:
        return float(lexicon.number_words[t])
    try:
        if re.fullmatch(r"\d+\s+\d+/\d+", t):
            whole, frac = t.split()
            n, d = frac.split("/")
            return int(whole) + int(n) / int(d)
        if re.fullmatch(r"\d+/\d+", t):
            n, d = t.split("/")
            return int(n) / int(d)
        if re.fullmatch(r"\d*\.\d+|\d+", t):
            return float(t)
    except ZeroDivisionError:
        return None
    return None


def _match_unit(text: str, start: int, lexicon: Lexicon):
    """Return (unit, end_index) for the token(s) after ``start``, or (None, start)."""
    m = _TOKENS_RE.match(text, start)
    if not m:
        return None, start
    first = m.group(1).rstrip(",;:")
    # Two-token units first: "fl oz", "fluid ounces"
    if m.group(3):
        pair = f"{first} {m.group(3).rstrip(',;:')}"
        unit = lexicon.normalize_unit(pair)
        if unit:
            return unit, m.end(3)
    unit = lexicon.normalize_unit(first)
    if unit:
        return unit, m.end(1)
    return None, start


def parse_quantity_and_unit(fragment: str, lexicon: Lexicon = DEFAULT_LEXICON) -> QuantityMatch:
    """
    Parse a leading quantity and unit. Never raises.

    ``consumed`` counts characters of the fraction-normalized, left-stripped
    fragment, not of ``fragment`` itself ("1½ cups" becomes "1.5 cups"). Use
    ``remainder`` for the unconsumed text rather than ``fragment[consumed:]``.
    """
    text = normalize_fractions(fragment or "").lstrip()
    if not text:
        return EMPTY_MATCH

    quantity = None
    consumed = 0

    m = _QTY_RE.match(text)
    if m:
        low = parse_number_token(m.group("a"), lexicon)
        high = parse_number_token(m.group("b"), lexicon) if m.group("b") else None
        if low is not None:
            quantity = Quantity(min=low, max=high)
            consumed = m.end("b") if high is not None else m.end("a")
    elif lexicon.number_words:
        words = "|".join(sorted(lexicon.number_words, key=len, reverse=True))
        wm = re.match(rf"({words})\b", text, re.IGNORECASE)
        if wm:
            quantity = Quantity(min=parse_number_token(wm.group(1), lexicon))
            consumed = wm.end()

    if quantity is None:
        return EMPTY_MATCH

    unit, consumed = _match_unit(text, consumed, lexicon)
    return QuantityMatch(quantity, unit, consumed, text[consumed:].lstrip())
