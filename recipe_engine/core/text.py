import re
from typing import List, Union

# Keycap emoji ("1️⃣") as produced by chat/LLM output.
_KEYCAP_RE = re.compile(r"(\d)️?⃣")
_ORDINAL_RE = re.compile(r"^\s*(?:step\s*)?\d{1,2}\s*(?:[.):](?!\d)|\s-\s)\s*", re.IGNORECASE)
_BULLET_RE = re.compile(r"^[\s\-•*·▪◦]+")


def clean_md(text: str) -> str:
    """
    Sanitize markdown artifacts from text.
    Removes:
    - Leading headers (#, ##)
    - Bold markers (**, __)
    - Leading bullets (-, *)
    """
    if not text:
        return ""

    # Remove bolding (**text** -> text)
    text = re.sub(r"(\*\*|__)(.*?)\1", r"\2", text)

    # Remove leading headers (# Title -> Title)
    text = re.sub(r"^\s*#+\s+", "", text)

    # Remove leading bullets (- Item -> Item)
    text = re.sub(r"^\s*[-*•]\s+", "", text)

    return text.strip()


def strip_list_markers(text: str) -> str:
    """Drop leading bullets and dashes ("- 1 cup", "• 2 eggs")."""
    return _BULLET_RE.sub("", text or "").strip()


def normalize_dashes(text: str) -> str:
    return re.sub(r"[–—‒]", "-", text)


def normalize_keycaps(text: str) -> str:
    return _KEYCAP_RE.sub(r"\1.", text)


def strip_ordinal(text: str) -> str:
    """Drop a leading step marker: "1.", "2)", "3 -", "Step 4:"."""
    s = normalize_keycaps(text or "")
    s = _ORDINAL_RE.sub("", s, count=1)
    return strip_list_markers(s)


def collapse_ws(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def split_lines(value: Union[List[str], str, None]) -> List[str]:
    """Accept a list or a newline-separated block; return trimmed, non-blank lines."""
    if value is None:
        return []
    if isinstance(value, str):
        value = re.split(r"\r?\n", value)
    return [line.strip() for line in value if line and line.strip()]
