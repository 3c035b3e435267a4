"""
Instruction step parser.

Segments instruction text into steps, then annotates each step with actions,
tools, temperatures, durations, heat/speed words, doneness cues, concurrency
markers, yields, notes and references to already-parsed ingredients.
"""

import logging
import re
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from ..core.text import collapse_ws, split_lines, strip_ordinal
from .lexicon import DEFAULT_LEXICON, Lexicon, fold_accents, plural_forms
from .parser import ParsedIngredient, ParsedStep
from .sections import split_into_sections
from .timers import extract_temperatures, extract_times

logger = logging.getLogger("recipe_engine.parsing")

_SENTENCE_SPLIT = re.compile(r"(?<=\.)\s+(?=[A-Z])|;\s+")
_WORD_RE = re.compile(r"[a-zà-ÿ]+")
_CONCURRENCY_RE = re.compile(r"\bmeanwhile\b|\bwhile\b|\bat the same time\b|\bin a separate\b", re.IGNORECASE)
_YIELD_RE = re.compile(r"\b(?:make the|forms? a)\s+[^.,;]+", re.IGNORECASE)
_UNTIL_RE = re.compile(r"\buntil\s+([^.,;]+)", re.IGNORECASE)
_CLAUSE_SPLIT = re.compile(r"[.;!]\s*")


class StepSegment(NamedTuple):
    raw: str
    text: str
    section: Optional[str] = None


def segment_steps(lines: Union[Sequence[str], str]) -> List[StepSegment]:
    """
    One block of prose is split into sentences (or at semicolons).
    A multi-line list keeps one step per line, with "For ...:" headers as sections.
    """
    arr = split_lines(lines)
    if not arr:
        return []

    if len(arr) == 1:
        logger.debug("Segmenting instruction prose by sentence")
        prose = strip_ordinal(arr[0])
        return [StepSegment(raw=p.strip(), text=p.strip()) for p in _SENTENCE_SPLIT.split(prose) if p.strip()]

    segments = []
    for block in split_into_sections(arr, strict=True):
        for line in block.lines:
            text = strip_ordinal(line)
            if text:
                segments.append(StepSegment(raw=line, text=text, section=block.section))
    return segments


# --- per-step extractors ---

def _lemma(word: str, actions: frozenset) -> Optional[str]:
    w = fold_accents(word)
    candidates = [w]
    if w.endswith("ing"):
        stem = w[:-3]
        candidates += [stem, stem + "e"]
        if len(stem) > 2 and stem[-1] == stem[-2]:
            candidates.append(stem[:-1])  # stirring -> stir
    elif w.endswith("ed"):
        stem = w[:-2]
        candidates += [stem, w[:-1]]
        if len(stem) > 2 and stem[-1] == stem[-2]:
            candidates.append(stem[:-1])  # chopped -> chop
    for c in candidates:
        if c in actions:
            return c
    return None


def extract_actions(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> List[str]:
    actions = []
    for word in _WORD_RE.findall(text.lower()):
        lemma = _lemma(word, lexicon.actions)
        if lemma and lemma not in actions:
            actions.append(lemma)
    return actions


def _find_phrases(text: str, phrases: Iterable[str], suffix: str = "") -> List[Tuple[int, str]]:
    """Longest-first, non-overlapping phrase matches as (position, matched text)."""
    taken: List[Tuple[int, int]] = []
    hits = []
    for phrase in sorted(phrases, key=len, reverse=True):
        body = r"[\s-]+".join(re.escape(part) for part in re.split(r"[\s-]+", phrase))
        for m in re.finditer(rf"\b{body}{suffix}\b", text, re.IGNORECASE):
            if any(m.start() < end and start < m.end() for start, end in taken):
                continue
            taken.append((m.start(), m.end()))
            hits.append((m.start(), m.group(0)))
    hits.sort()
    return hits


def extract_tools(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> List[str]:
    tools = []
    lookup = {t.lower(): t for t in lexicon.tools}
    for _, found in _find_phrases(text, lexicon.tools, suffix=r"(?:e?s)?"):
        key = collapse_ws(found.lower().replace("-", " "))
        name = lookup.get(key) or lookup.get(re.sub(r"e?s$", "", key)) or key
        if name not in tools:
            tools.append(name)
    return tools


def extract_speeds(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> List[str]:
    speeds = []
    for _, found in _find_phrases(text, lexicon.heat_words, suffix=r"\b(?:\s+(?:heat|speed))?"):
        s = collapse_ws(found.lower())
        s = re.sub(r"^medium[\s-]+(low|high)", r"medium-\1", s)
        if s not in speeds:
            speeds.append(s)
    return speeds


def extract_doneness(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> List[str]:
    hits = [(m.start(), f"until {m.group(1).strip()}") for m in _UNTIL_RE.finditer(text)]
    if lexicon.doneness_targets:
        targets = "|".join(re.escape(t) for t in sorted(lexicon.doneness_targets, key=len, reverse=True))
        to_re = re.compile(rf"\bto\s+((?:{targets})\b[^.,;]*)", re.IGNORECASE)
        hits += [(m.start(), f"to {m.group(1).strip()}") for m in to_re.finditer(text)]
    return [phrase for _, phrase in sorted(hits)]


def extract_yields(text: str) -> List[str]:
    return [collapse_ws(m.group(0).lower()) for m in _YIELD_RE.finditer(text)]


def extract_step_notes(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> List[str]:
    notes = []
    for clause in _CLAUSE_SPLIT.split(text):
        clause = clause.strip()
        if clause and any(re.search(rf"\b{re.escape(cue)}\b", clause, re.IGNORECASE) for cue in lexicon.step_note_cues):
            notes.append(clause)
    return notes


def link_ingredients(text: str, ingredients: Sequence[ParsedIngredient], lexicon: Lexicon = DEFAULT_LEXICON) -> List[str]:
    """Canonical names of ingredients mentioned in the step (whole word, optional plural)."""
    refs = []
    for ing in ingredients:
        name = ing.item
        if not name or name in refs:
            continue
        for alias in lexicon.aliases_for(name):
            spellings = [rf"{re.escape(alias)}(?:e?s)?"] + [re.escape(p) for p in plural_forms(alias)]
            if re.search(rf"\b(?:{'|'.join(spellings)})\b", text, re.IGNORECASE):
                refs.append(name)
                break
    return refs


def parse_step(segment: StepSegment, number: int, ingredients: Sequence[ParsedIngredient] = (),
               lexicon: Lexicon = DEFAULT_LEXICON) -> ParsedStep:
    text = segment.text
    refs = link_ingredients(text, ingredients, lexicon)
    tools = extract_tools(text, lexicon)
    yields = extract_yields(text)
    notes = extract_step_notes(text, lexicon)
    return ParsedStep(
        raw=segment.raw,
        number=number,
        section=segment.section,
        actions=extract_actions(text, lexicon),
        ingredients_ref=refs or None,
        tools=tools or None,
        temperatures=extract_temperatures(text),
        times=extract_times(text),
        speeds=extract_speeds(text, lexicon),
        doneness=extract_doneness(text, lexicon),
        concurrency=bool(_CONCURRENCY_RE.search(text)),
        yields=yields or None,
        notes=notes or None,
    )


def parse_instructions(
    lines: Union[Sequence[str], str],
    ingredients: Sequence[ParsedIngredient] = (),
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> List[ParsedStep]:
    """Parse instruction text into steps numbered from 1."""
    return [
        parse_step(segment, number, ingredients, lexicon)
        for number, segment in enumerate(segment_steps(lines), start=1)
    ]
