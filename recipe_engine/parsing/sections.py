import re
from typing import List, Optional

from pydantic import BaseModel

from ..core.text import clean_md

# "For the sauce:", "FOR THE RUB"
HEADER_RE = re.compile(r"^(for\s+[^:]+?)\s*(:?)$", re.IGNORECASE)
MAX_HEADER_LEN = 50


class SectionBlock(BaseModel):
    section: Optional[str] = None
    lines: List[str] = []


def section_header(line: str, strict: bool = False) -> Optional[str]:
    """Return the section name if the line is a "For ...:" header."""
    s = clean_md(line).strip()
    if not s or len(s) >= MAX_HEADER_LEN:
        return None
    m = HEADER_RE.match(s)
    if not m:
        return None
    if strict and not m.group(2):
        return None
    return m.group(1).strip()


def split_into_sections(lines: List[str], strict: bool = False) -> List[SectionBlock]:
    """
    Group raw lines under "For ...:" headers, preserving order.
    Lines before the first header go to an unnamed block; blank lines are dropped.
    """
    blocks: List[SectionBlock] = []
    current = SectionBlock()
    for raw in lines:
        line = (raw or "").strip()
        if not line:
            continue
        name = section_header(line, strict=strict)
        if name is not None:
            if current.lines:
                blocks.append(current)
            current = SectionBlock(section=name)
        else:
            current.lines.append(line)
    if current.lines:
        blocks.append(current)
    return blocks
