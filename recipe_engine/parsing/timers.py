import re
from typing import List, Optional

from .parser import Duration, Temperature
from .quantity import normalize_fractions, parse_number_token

_NUM = r"\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?"

# Durations like "20 minutes", "about 5 min", "10-12 mins", "1 to 2 hours", "30-second", "1/2 hour"
DURATION_REGEX = re.compile(
    rf"(?:\babout\s+)?\b({_NUM})(?:\s*(?:-|–|to)\s*({_NUM}))?[\s-]*"
    r"(seconds?|secs?|minutes?|mins?|hours?|hrs?)\b",
    re.IGNORECASE,
)

# "375°F", "180 C", "350 degrees F"
TEMPERATURE_REGEX = re.compile(r"\b(\d{2,3})\s*(?:°|º|degrees?)?\s*([FC])\b", re.IGNORECASE)


def _duration_unit(word: str) -> str:
    w = word.lower()
    if w.startswith("sec"):
        return "s"
    if w.startswith(("hour", "hr")):
        return "h"
    return "min"


def _number(value: Optional[str]) -> Optional[float]:
    n = parse_number_token(value) if value else None
    if n is None:
        return None
    return int(n) if n.is_integer() else n


def extract_times(text: str) -> List[Duration]:
    """Durations in order of appearance; fraction glyphs count ("1½ hours")."""
    times = []
    for match in DURATION_REGEX.finditer(normalize_fractions(text or "")):
        low, high, unit = match.groups()
        low_value = _number(low)
        if low_value is None:
            continue  # "1/0 hour"
        times.append(Duration(
            min=low_value,
            max=_number(high),
            unit=_duration_unit(unit),
        ))
    return times


def extract_temperatures(text: str) -> List[Temperature]:
    return [
        Temperature(value=int(value), unit=unit.upper())
        for value, unit in TEMPERATURE_REGEX.findall(text or "")
    ]
