"""
Ingredient line parser.

A line runs through an ordered tuple of pure stages. Each stage takes the
current ``LineState`` (frozen) and returns a new one with some of the
remaining text consumed and a partial result filled in. After the
single-item parse, ``EXPANSION_RULES`` may split the record (salt and pepper).
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, List, NamedTuple, Optional, Tuple

from ..core.text import collapse_ws, normalize_dashes, strip_list_markers
from .lexicon import DEFAULT_LEXICON, Lexicon, is_countable_unit, singularize_word
from .parser import ContainerInfo, ContainerSize, ParsedIngredient, Quantity
from .quantity import normalize_fractions, parse_quantity_and_unit

logger = logging.getLogger("recipe_engine.parsing")

GARBAGE_TOKENS = {
    "or", "and", "optional", "to taste", "if needed", "for serving", "plus more", "divided"
}

_SIZE = (
    r"(?P<size>\d+(?:\.\d+)?)\s*-?\s*"
    r"(?P<unit>fl\.?\s*oz|fluid\s+ounces?|oz|ounces?|g|grams?|kg|ml|l|liters?|litres?|lbs?|pounds?)\b\.?"
)
_PAREN_SIZE = rf"\(\s*{_SIZE}(?:\s+each)?\s*\)"
_KIND = r"(?P<kind>cans?|tins?|jars?|packages?|pkgs?|packets?|bottles?)\b"

# "(28 oz) can", "cans (14.5 oz each)", "15-ounce can"
CONTAINER_PATTERNS = (
    re.compile(rf"{_PAREN_SIZE}\s*{_KIND}", re.IGNORECASE),
    re.compile(rf"{_KIND}\s*{_PAREN_SIZE}", re.IGNORECASE),
    re.compile(rf"\b{_SIZE}\s+{_KIND}", re.IGNORECASE),
)

_TOP_LEVEL_COMMA = re.compile(r",(?![^()]*\))")
_PAREN_CONTENT = re.compile(r"\(([^()]*)\)")
_OR_SPLIT = re.compile(r"\s+or\s+", re.IGNORECASE)
_OF_CLAUSE = re.compile(r"^(?:(\S+)\s+)?of\s+(.+)$", re.IGNORECASE)
_PART_HEADS = ("juice", "zest")


@dataclass(frozen=True)
class LineState:
    raw: str
    section: Optional[str] = None
    line: str = ""          # cleaned full line
    text: str = ""          # unconsumed remainder
    consumed_head: bool = False
    quantity: Optional[Quantity] = None
    unit: Optional[str] = None
    container: Optional[ContainerInfo] = None
    forms: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()
    qualifiers: Tuple[str, ...] = ()
    alternatives: Tuple[str, ...] = ()
    to_taste: bool = False
    estimated: bool = False
    brand: Optional[str] = None
    item: str = ""
    category: Optional[str] = None


class ExpansionRule(NamedTuple):
    name: str
    predicate: Callable[[str, ParsedIngredient], bool]
    transform: Callable[[ParsedIngredient], List[ParsedIngredient]]


# --- helpers ---

def sanitize_ingredient_text(text: str) -> str:
    """Strip markdown and normalize whitespace."""
    if not text:
        return ""
    s = text.replace("**", "").replace("__", "").replace("*", "")
    return collapse_ws(s)


def is_garbage_line(text: str) -> bool:
    """Check if the text is just a connector word or garbage."""
    if not text:
        return True
    t = re.sub(r"[^\w\s]", "", text.lower()).strip()
    if not t:
        return True
    return t in GARBAGE_TOKENS


def _tidy(text: str) -> str:
    s = re.sub(r"\(\s*\)", "", text)
    s = re.sub(r"\s+,", ",", s)
    s = re.sub(r",(\s*,)+", ",", s)
    s = collapse_ws(s).strip(" ,;:")
    s = re.sub(r"\s+(?:or|and)$", "", s, flags=re.IGNORECASE)
    return s.strip(" ,;:")


def _scan_vocab(text: str, vocab: Tuple[str, ...]) -> Tuple[List[str], str]:
    """Find vocabulary phrases (longest first, non-overlapping). Returns (found, leftover)."""
    found = []
    leftover = text.lower()
    for phrase in sorted(vocab, key=len, reverse=True):
        pattern = rf"\b{re.escape(phrase)}\b"
        if re.search(pattern, leftover):
            found.append(phrase)
            leftover = re.sub(pattern, " ", leftover)
    # Keep found phrases in order of appearance in the original text
    lowered = text.lower()
    found.sort(key=lambda p: lowered.find(p))
    return found, collapse_ws(leftover)


def _dedupe(values) -> Optional[List[str]]:
    out = list(dict.fromkeys(v for v in values if v))
    return out or None


def _size_unit(raw_unit: str, lexicon: Lexicon) -> str:
    return lexicon.normalize_unit(raw_unit) or collapse_ws(raw_unit.lower())


def _strip_quantity(phrase: str, lexicon: Lexicon) -> str:
    match = parse_quantity_and_unit(phrase, lexicon)
    return match.remainder if match.consumed else phrase


def _brand_stopword(token: str, lexicon: Lexicon) -> bool:
    t = token.lower()
    if t in lexicon.brand_stopwords or t in lexicon.count_nouns:
        return True
    if lexicon.normalize_unit(t):
        return True
    return any(t == q or t in q.split() for q in lexicon.qualifiers)


# --- stages ---

def clean_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """Strip bullets and markdown; normalize dashes and fraction glyphs."""
    text = sanitize_ingredient_text(normalize_dashes(state.raw))
    text = strip_list_markers(text)
    text = collapse_ws(normalize_fractions(text))
    if is_garbage_line(text):
        return replace(state, line=text, text="")
    return replace(state, line=text, text=text)


def container_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """Pull a package size next to a container word: "(28 oz) can", "cans (14.5 oz)"."""
    for pattern in CONTAINER_PATTERNS:
        m = pattern.search(state.text)
        if not m:
            continue
        kind = lexicon.normalize_unit(m.group("kind"))
        container = ContainerInfo(
            kind=kind if kind in lexicon.container_kinds else None,
            size=ContainerSize(value=float(m.group("size")), unit=_size_unit(m.group("unit"), lexicon)),
        )
        text = collapse_ws(state.text[:m.start()] + " " + state.text[m.end():])
        return replace(state, container=container, text=text)
    return state


def quantity_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """Leading quantity and unit; container words fold into container.count."""
    match = parse_quantity_and_unit(state.text, lexicon)
    if not match.consumed:
        return state

    qty, unit = match.quantity, match.unit
    container = state.container
    count = qty.min if qty else None

    if unit in lexicon.container_kinds:
        container = (container or ContainerInfo()).model_copy(
            update={"count": count, "kind": (container.kind if container and container.kind else unit)}
        )
        qty, unit = None, None
    elif container is not None and unit is None:
        container = container.model_copy(update={"count": count})
        qty = None

    return replace(state, text=match.remainder, consumed_head=True,
                   quantity=qty, unit=unit, container=container)


def estimate_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """Vague amounts: "a pinch of salt", "handful of spinach"."""
    if state.quantity is not None or not lexicon.estimate_words:
        return state
    words = "|".join(lexicon.estimate_words)
    leading = re.match(rf"^(?:(an?)\s+)?({words})(?:e?s)?\b(?:\s+of\b)?\s*", state.text, re.IGNORECASE)
    m = leading or re.search(rf"\b(an?)\s+({words})\b(?:\s+of\b)?", state.text, re.IGNORECASE)
    if not m:
        return state
    phrase = " ".join(p.lower() for p in m.groups() if p)
    text = _tidy(state.text[:m.start()] + " " + state.text[m.end():])
    if not text:
        # "Sprinkles" is the item, not an amount
        return state
    return replace(state, text=text, consumed_head=True, estimated=True, quantity=Quantity(text=phrase))


def notes_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """Note vocabulary anywhere in the remainder; "to taste" becomes a flag."""
    notes = list(state.notes)
    to_taste = state.to_taste
    for m in lexicon.note_phrases.finditer(state.text):
        phrase = collapse_ws(m.group(1).lower())
        if phrase == "to taste":
            to_taste = True
        else:
            notes.append(phrase)
    if len(notes) == len(state.notes) and to_taste == state.to_taste:
        return state
    text = _tidy(lexicon.note_phrases.sub(" ", state.text))
    return replace(state, text=text, notes=tuple(notes), to_taste=to_taste)


def descriptor_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """Split on top-level commas; collect forms and qualifiers from the descriptor clauses."""
    parts = [p.strip() for p in _TOP_LEVEL_COMMA.split(state.text) if p.strip()]
    if not parts:
        return replace(state, text="")

    main, tail = parts[0], parts[1:]
    descriptors = _PAREN_CONTENT.findall(main) + tail
    main = collapse_ws(_PAREN_CONTENT.sub(" ", main))

    forms = list(state.forms)
    qualifiers = list(state.qualifiers)
    notes = list(state.notes)
    for clause in descriptors:
        clause = collapse_ws(clause)
        if not clause:
            continue
        found_forms, rest = _scan_vocab(clause, lexicon.prep_forms)
        found_quals, _ = _scan_vocab(rest, lexicon.qualifiers)
        forms.extend(found_forms)
        qualifiers.extend(found_quals)
        if not found_forms and not found_quals:
            notes.append(clause.lower())

    # Leading qualifiers are not part of the canonical item ("large eggs")
    peeled = True
    while peeled:
        peeled = False
        for q in sorted(lexicon.qualifiers, key=len, reverse=True):
            m = re.match(rf"{re.escape(q)}\s+(?=\S)", main, re.IGNORECASE)
            if m:
                qualifiers.append(q)
                main = main[m.end():]
                peeled = True
                break

    return replace(state, text=main, forms=tuple(forms), qualifiers=tuple(qualifiers), notes=tuple(notes))


def alternatives_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """ "soy sauce or tamari" keeps the left item, stores the right as an alternative."""
    parts = [p.strip() for p in _OR_SPLIT.split(state.text)]
    if len(parts) < 2:
        return state
    alternatives = list(state.alternatives)
    for part in parts[1:]:
        name = _canonical_phrase(_strip_quantity(part, lexicon), lexicon)
        if name:
            alternatives.append(name)
    return replace(state, text=parts[0], alternatives=tuple(alternatives))


def brand_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """Leading capitalized tokens after the quantity are a brand ("Hunt's diced tomatoes")."""
    if not lexicon.detect_brands or not state.consumed_head:
        return state
    tokens = state.text.split()
    brand_tokens = []
    while tokens and lexicon.brand_token.match(tokens[0]) and not _brand_stopword(tokens[0], lexicon):
        brand_tokens.append(tokens.pop(0))
    if not brand_tokens or not tokens:
        return state
    return replace(state, brand=" ".join(brand_tokens), text=" ".join(tokens))


def countable_stage(state: LineState, lexicon: Lexicon) -> LineState:
    """Bare countable noun as unit: "2 eggs", "1 head lettuce"."""
    if state.unit is not None or state.container is not None:
        return state
    tokens = state.text.split()
    if not tokens:
        return state
    unit = lexicon.count_nouns.get(tokens[0].lower().strip(",."))
    if not is_countable_unit(unit):
        return state
    text = state.text
    if unit != "count" and len(tokens) > 1:
        text = " ".join(tokens[1:])
    return replace(state, unit=unit, text=text)


def _canonical_phrase(text: str, lexicon: Lexicon) -> str:
    s = re.sub(r"\([^)]*\)?", " ", text)
    s = collapse_ws(s)
    m = _OF_CLAUSE.match(s)
    if m:
        head = m.group(1)
        if head is None or lexicon.normalize_unit(head) or singularize_word(head) in lexicon.estimate_words:
            s = m.group(2)
        elif head.lower() in _PART_HEADS:
            # "juice of 1 lemon" -> "lemon juice"
            s = f"{_strip_quantity(m.group(2), lexicon)} {head.lower()}"
    s = re.sub(r"[^\w\s'&-]", " ", s)
    s = collapse_ws(s).strip("-'& ")
    return lexicon.canonical(s) if s else ""


def canonical_stage(state: LineState, lexicon: Lexicon) -> LineState:
    return replace(state, item=_canonical_phrase(state.text, lexicon), text="")


def category_stage(state: LineState, lexicon: Lexicon) -> LineState:
    if not state.item:
        return state
    return replace(state, category=lexicon.categorize(state.item))


PIPELINE: Tuple[Callable[[LineState, Lexicon], LineState], ...] = (
    clean_stage,
    container_stage,
    quantity_stage,
    estimate_stage,
    notes_stage,
    descriptor_stage,
    alternatives_stage,
    brand_stage,
    countable_stage,
    canonical_stage,
    category_stage,
)


# --- expansion rules ---

# Whole canonical item only; a mention inside a descriptor clause does not expand
_SALT_PEPPER_RE = re.compile(
    r"(?:(?:kosher|sea|table)\s+)?salt\s*(?:and|&)\s*(?:freshly\s+ground\s+)?(?:black\s+)?pepper",
    re.IGNORECASE,
)


def _split_salt_pepper(base: ParsedIngredient) -> List[ParsedIngredient]:
    return [
        base.model_copy(update={"item": "salt", "to_taste": True, "category": "pantry"}),
        base.model_copy(update={"item": "black pepper", "to_taste": True, "category": "pantry"}),
    ]


EXPANSION_RULES: Tuple[ExpansionRule, ...] = (
    ExpansionRule(
        name="salt-and-pepper",
        predicate=lambda line, base: bool(_SALT_PEPPER_RE.fullmatch(base.item)),
        transform=_split_salt_pepper,
    ),
)


# --- entry point ---

def run_pipeline(raw: str, section: Optional[str] = None, lexicon: Lexicon = DEFAULT_LEXICON) -> LineState:
    state = LineState(raw=(raw or "").strip(), section=section)
    for stage in PIPELINE:
        state = stage(state, lexicon)
    return state


def _to_record(state: LineState, lexicon: Lexicon) -> ParsedIngredient:
    return ParsedIngredient(
        raw=state.raw,
        section=state.section,
        quantity=None if state.quantity is None or state.quantity.is_absent else state.quantity,
        unit=state.unit,
        item=state.item,
        container=state.container,
        forms=_dedupe(state.forms),
        notes=_dedupe(state.notes),
        alternatives=_dedupe(state.alternatives),
        to_taste=state.to_taste,
        estimated=state.estimated,
        brand=state.brand,
        qualifiers=_dedupe(state.qualifiers),
        category=state.category or lexicon.default_category,
    )


def parse_ingredient_line(
    raw: str,
    section: Optional[str] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
    rules: Tuple[ExpansionRule, ...] = EXPANSION_RULES,
) -> List[ParsedIngredient]:
    """
    Parse one ingredient line into zero or more records.
    Never raises; a line with no item text left yields [].
    """
    state = run_pipeline(raw, section, lexicon)
    if not state.item:
        logger.debug(f"Dropping ingredient line with no item: {state.raw!r}")
        return []

    base = _to_record(state, lexicon)
    for rule in rules:
        if rule.predicate(state.line, base):
            logger.debug(f"Expansion rule {rule.name} applied to {state.raw!r}")
            return rule.transform(base)
    return [base]
