"""
Static lexical tables for the recipe parser.

Everything here is built once at import time and never mutated:
- Unit aliases and their canonical spellings
- Number words, fraction glyphs
- Ingredient descriptors (notes, preparation forms, qualifiers)
- Synonyms and category rules for canonical item names
- Cooking vocabulary (actions, tools, heat words, doneness targets)

The tables are bundled into a frozen ``Lexicon`` so callers can swap out the
approximate ones (brand heuristic, category keywords) with ``dataclasses.replace``.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# --- Units ---

CANONICAL_UNITS = frozenset({
    "tsp", "tbsp", "cup", "ml", "l", "g", "kg", "mg", "oz", "floz", "lb",
    "pt", "qt", "gal",
    "can", "jar", "package", "bottle",
    "stick", "clove", "bunch", "slice", "head", "sprig",
    "pinch", "dash", "count",
})

_ALIASES = {
    # Volume
    "tsp": "tsp", "tsps": "tsp", "teaspoon": "tsp", "teaspoons": "tsp",
    "tbsp": "tbsp", "tbs": "tbsp", "tbsps": "tbsp", "tbl": "tbsp",
    "tablespoon": "tbsp", "tablespoons": "tbsp",
    "c": "cup", "cup": "cup", "cups": "cup",
    "ml": "ml", "mls": "ml", "milliliter": "ml", "milliliters": "ml", "millilitre": "ml", "millilitres": "ml",
    "l": "l", "liter": "l", "liters": "l", "litre": "l", "litres": "l",
    "fl oz": "floz", "floz": "floz", "fluid ounce": "floz", "fluid ounces": "floz",
    "pt": "pt", "pint": "pt", "pints": "pt",
    "qt": "qt", "quart": "qt", "quarts": "qt",
    "gal": "gal", "gallon": "gal", "gallons": "gal",
    # Mass
    "g": "g", "gram": "g", "grams": "g", "gr": "g",
    "kg": "kg", "kilogram": "kg", "kilograms": "kg", "kgs": "kg",
    "mg": "mg", "milligram": "mg", "milligrams": "mg",
    "oz": "oz", "ounce": "oz", "ounces": "oz",
    "lb": "lb", "lbs": "lb", "pound": "lb", "pounds": "lb",
    # Containers
    "can": "can", "cans": "can", "tin": "can", "tins": "can",
    "jar": "jar", "jars": "jar",
    "package": "package", "packages": "package", "pkg": "package", "pkgs": "package",
    "packet": "package", "packets": "package",
    "bottle": "bottle", "bottles": "bottle",
    # Countables
    "stick": "stick", "sticks": "stick",
    "clove": "clove", "cloves": "clove",
    "bunch": "bunch", "bunches": "bunch",
    "slice": "slice", "slices": "slice",
    "head": "head", "heads": "head",
    "sprig": "sprig", "sprigs": "sprig",
    "pinch": "pinch", "pinches": "pinch",
    "dash": "dash", "dashes": "dash",
    "count": "count", "piece": "count", "pieces": "count", "pc": "count", "pcs": "count",
}

UNIT_ALIASES: Mapping[str, str] = MappingProxyType(_ALIASES)

CONTAINER_KINDS = frozenset({"can", "jar", "package", "bottle"})

COUNTABLE_UNITS = frozenset({
    "clove", "bunch", "slice", "head", "stick", "sprig", "can", "jar", "package", "bottle", "count",
})

# Bare nouns that act as their own unit when no unit was given ("2 eggs", "1 head lettuce").
COUNT_NOUNS: Mapping[str, str] = MappingProxyType({
    "egg": "count", "eggs": "count",
    "clove": "clove", "cloves": "clove",
    "bunch": "bunch", "bunches": "bunch",
    "stick": "stick", "sticks": "stick",
    "head": "head", "heads": "head",
    "slice": "slice", "slices": "slice",
})

# --- Numbers ---

NUMBER_WORDS: Mapping[str, int] = MappingProxyType({
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6,
    "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12,
})

UNICODE_FRACTIONS: Mapping[str, float] = MappingProxyType({
    "¼": 1 / 4, "½": 1 / 2, "¾": 3 / 4,
    "⅓": 1 / 3, "⅔": 2 / 3,
    "⅛": 1 / 8, "⅜": 3 / 8, "⅝": 5 / 8, "⅞": 7 / 8,
})

# --- Ingredient descriptors ---

NOTE_PHRASES = re.compile(
    r"\b(to taste|optional|divided|for serving|for garnish|as needed|if needed|plus more\b[^,()]*)",
    re.IGNORECASE,
)

# Longest first so "thinly sliced" wins over "sliced".
PREP_FORMS: Tuple[str, ...] = (
    "finely chopped", "roughly chopped", "thinly sliced", "drained and rinsed",
    "chopped", "minced", "diced", "sliced", "cubed", "halved", "quartered",
    "zested", "juiced", "peeled", "seeded", "pitted", "trimmed", "grated", "shredded",
    "crushed", "mashed", "melted", "beaten", "separated", "sifted", "toasted",
    "drained", "rinsed", "cooked", "julienned",
)

QUALIFIERS: Tuple[str, ...] = (
    "boneless skinless", "freshly ground", "room temperature", "extra large", "extra-large",
    "large", "medium", "small", "ripe", "fresh", "boneless", "skinless",
    "packed", "softened", "cold", "warm", "lean", "organic", "unsalted", "salted",
)

# Capitalized words that are not brands ("Dijon mustard", "Greek yogurt").
BRAND_STOPWORDS = frozenset({
    "greek", "dijon", "italian", "french", "mexican", "thai", "english", "kosher", "roma",
    "parmesan", "parmigiano", "cheddar", "swiss", "yukon", "granny", "worcestershire",
    "sriracha", "cajun", "chinese", "japanese", "spanish", "persian", "black", "white",
    "red", "green", "brown", "all-purpose", "whole", "extra-virgin", "the", "a", "an",
})

# Leading vague amounts: "a pinch of", "a handful".
ESTIMATE_WORDS: Tuple[str, ...] = ("pinch", "dash", "handful", "splash", "sprinkle", "drizzle")

# --- Canonical names ---

SYNONYMS: Mapping[str, str] = MappingProxyType({
    "scallion": "green onion",
    "spring onion": "green onion",
    "confectioners sugar": "powdered sugar",
    "confectioners' sugar": "powdered sugar",
    "icing sugar": "powdered sugar",
    "garbanzo bean": "chickpea",
    "garbanzo": "chickpea",
    "coriander leaf": "cilantro",
    "fresh coriander": "cilantro",
    "bell peppers": "bell pepper",
    "aubergine": "eggplant",
    "courgette": "zucchini",
    "caster sugar": "superfine sugar",
    "plain flour": "all-purpose flour",
    "all purpose flour": "all-purpose flour",
    "ap flour": "all-purpose flour",
    "soya sauce": "soy sauce",
    "evoo": "extra-virgin olive oil",
    "extra virgin olive oil": "extra-virgin olive oil",
})

# Words the singularizer leaves alone.
UNINFLECTED = frozenset({
    "asparagus", "hummus", "couscous", "molasses", "swiss", "bass", "grass",
    "citrus", "octopus", "grits", "brussels", "herbes", "mayonnaise",
})

_IRREGULAR_PLURALS = MappingProxyType({
    "chilies": "chili",
    "chillies": "chilli",
    "leaves": "leaf",
    "loaves": "loaf",
    "halves": "half",
    "knives": "knife",
    "tomatoes": "tomato",
    "potatoes": "potato",
    "mangoes": "mango",
    "anchovies": "anchovy",
    "cookies": "cookie",
    "brownies": "brownie",
    "pierogies": "pierogi",
})

# Ordered: first matching rule wins. Keywords match as a word prefix of the item,
# then as its head noun (last word).
CATEGORY_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("frozen", ("frozen", "ice cream")),
    ("produce", (
        "apple", "banana", "tomato", "tomatillo", "onion", "shallot", "garlic", "lemon", "lime",
        "orange", "bell pepper", "jalapeno", "carrot", "celery", "cilantro", "parsley", "basil",
        "mint", "dill", "cucumber", "lettuce", "spinach", "kale", "arugula", "broccoli",
        "cauliflower", "ginger", "scallion", "green onion", "herb", "chili", "avocado",
        "mushroom", "potato", "sweet potato", "zucchini", "eggplant", "squash", "corn",
        "pea", "green bean", "berry", "strawberry", "blueberry", "raspberry", "grape", "peach",
        "pear", "mango", "pineapple", "cabbage", "beet", "radish", "leek", "asparagus",
    )),
    ("meat", (
        "beef", "pork", "chicken", "turkey", "lamb", "bacon", "sausage", "ham", "veal",
        "steak", "prosciutto", "pancetta", "chorizo", "duck",
    )),
    ("seafood", (
        "salmon", "tuna", "shrimp", "prawn", "cod", "anchovy", "sardine", "tilapia",
        "halibut", "scallop", "crab", "lobster", "mussel", "clam", "fish",
    )),
    ("dairy", (
        "milk", "butter", "cheese", "cream", "yogurt", "half and half", "buttermilk",
        "sour cream", "cream cheese", "egg", "parmesan", "mozzarella", "cheddar", "ricotta",
        "feta", "ghee",
    )),
    ("pantry", (
        "flour", "all-purpose flour", "sugar", "salt", "pepper", "black pepper", "oil",
        "olive oil", "vinegar", "soy sauce", "tamari", "honey", "yeast", "baking", "spice",
        "cumin", "paprika", "oregano", "thyme", "cinnamon", "nutmeg", "vanilla", "rice",
        "pasta", "spaghetti", "noodle", "bean", "lentil", "chickpea", "broth", "stock",
        "sauce", "ketchup", "mustard", "mayonnaise", "cornstarch", "cocoa", "chocolate",
        "oat", "nut", "almond", "walnut", "pecan", "peanut butter", "maple syrup",
    )),
    ("bakery", ("bread", "bun", "baguette", "tortilla", "pita", "roll", "croissant", "naan")),
    ("beverage", ("beer", "wine", "soda", "juice", "water", "coffee", "tea")),
)

DEFAULT_CATEGORY = "pantry"

# --- Cooking vocabulary ---

ACTION_LEXICON = frozenset({
    "preheat", "heat", "whisk", "mix", "combine", "fold", "chop", "mince", "slice", "dice",
    "saute", "brown", "sear", "simmer", "boil", "bake", "roast", "grill", "broil", "drain",
    "strain", "knead", "proof", "marinate", "season", "garnish", "serve", "toss", "stir",
    "blend", "puree", "mash", "press", "rest", "cool", "reduce", "deglaze", "poach", "steam",
    "fry", "beat", "cream", "melt", "pour", "add", "cover", "chill", "grate", "peel",
    "spread", "sprinkle", "transfer", "flip", "coat", "arrange", "line", "grease", "bring",
})

_ACCENT_FOLDS = MappingProxyType({"sauté": "saute", "sautéed": "sauteed", "sautéing": "sauteing",
                                  "purée": "puree", "puréed": "pureed", "puréeing": "pureeing"})

TOOL_LEXICON: Tuple[str, ...] = (
    "oven", "skillet", "pan", "saucepan", "pot", "dutch oven", "sheet pan", "baking sheet",
    "baking dish", "tray", "stand mixer", "hand mixer", "mixer", "bowl", "mixing bowl",
    "blender", "food processor", "whisk", "spatula", "colander", "knife", "grater",
    "cutting board", "rolling pin", "wooden spoon", "slow cooker", "instant pot", "wok",
    "grill", "thermometer", "parchment paper", "muffin tin", "loaf pan", "cake pan",
)

HEAT_WORDS: Tuple[str, ...] = ("medium-low", "medium-high", "low", "medium", "high")

DONENESS_TARGETS: Tuple[str, ...] = (
    "al dente", "a boil", "a rolling boil", "a simmer", "a gentle simmer", "room temperature",
    "medium-rare", "medium rare", "desired doneness", "soft peaks", "stiff peaks",
    "crisp-tender", "a paste", "a thick", "a smooth", "the touch",
)

STEP_NOTE_CUES: Tuple[str, ...] = (
    "do not", "don't", "be careful", "careful", "store", "refrigerate", "freeze",
    "let rest", "let it rest", "let stand", "make ahead", "can be made", "leftovers",
)


# --- Lookups ---

def normalize_unit(raw: Optional[str], aliases: Mapping[str, str] = UNIT_ALIASES) -> Optional[str]:
    """Map a unit token to its canonical spelling, or None if unknown."""
    if not raw:
        return None
    key = raw.strip().lower()
    if key in aliases:
        return aliases[key]
    # "fl. oz", "fl-oz", "tbsp."
    key = re.sub(r"[.\-]", " ", key)
    key = re.sub(r"\s+", " ", key).strip()
    return aliases.get(key)


def is_countable_unit(unit: Optional[str]) -> bool:
    return bool(unit) and unit in COUNTABLE_UNITS


def singularize_word(word: str, uninflected: frozenset = UNINFLECTED) -> str:
    """Lightweight suffix stripping. Not a real inflector."""
    w = word.lower()
    if len(w) <= 3 or w in uninflected:
        return w
    if w in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[w]
    if w.endswith("ies") and len(w) > 4:
        return w[:-3] + "y"
    if w.endswith(("ches", "shes", "sses", "xes")):
        return w[:-2]
    if w.endswith("s") and not w.endswith(("ss", "us", "is")):
        return w[:-1]
    return w


def singularize_phrase(phrase: str, uninflected: frozenset = UNINFLECTED) -> str:
    return " ".join(singularize_word(w, uninflected) for w in phrase.split())


def canonical_item_name(phrase: str, synonyms: Mapping[str, str] = SYNONYMS,
                        uninflected: frozenset = UNINFLECTED) -> str:
    """Lowercase, singularize and fold synonyms."""
    s = re.sub(r"\s+", " ", phrase.strip().lower())
    if s in synonyms:
        return synonyms[s]
    s = singularize_phrase(s, uninflected)
    return synonyms.get(s, s)


@lru_cache(maxsize=16)
def _compile_rules(rules) -> Tuple[Tuple[str, re.Pattern], ...]:
    compiled = []
    for cat, keywords in rules:
        alts = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
        compiled.append((cat, re.compile(rf"^(?:{alts})\b")))
    return tuple(compiled)


def categorize(item: str, rules=CATEGORY_RULES, default: str = DEFAULT_CATEGORY) -> str:
    s = item.lower().strip()
    if not s:
        return default
    compiled = _compile_rules(rules)
    # 1. Prefix pass ("chicken thigh")
    for cat, pat in compiled:
        if pat.match(s):
            return cat
    # 2. Head noun pass ("shredded cheddar cheese")
    head = s.split()[-1]
    for cat, pat in compiled:
        if pat.match(head):
            return cat
    return default


def aliases_for(canonical: str, synonyms: Mapping[str, str] = SYNONYMS) -> Tuple[str, ...]:
    """Canonical name first, then every synonym that folds into it."""
    extra = sorted(k for k, v in synonyms.items() if v == canonical and k != canonical)
    return (canonical, *extra)


def plural_forms(phrase: str) -> Tuple[str, ...]:
    """
    Plural spellings of the last word that a plain s/es suffix misses:
    "cherry" -> "cherries", "leaf" -> "leaves".
    """
    words = phrase.split()
    if not words:
        return ()
    last = words[-1]
    forms = [p for p, s in _IRREGULAR_PLURALS.items() if s == last]
    if len(last) > 2 and last.endswith("y") and last[-2] not in "aeiou":
        forms.append(last[:-1] + "ies")
    return tuple(dict.fromkeys(" ".join(words[:-1] + [f]) for f in forms))


def fold_accents(word: str) -> str:
    return _ACCENT_FOLDS.get(word, word)


@dataclass(frozen=True)
class Lexicon:
    """All tables the parser reads. Replace fields to tune the heuristics."""
    unit_aliases: Mapping[str, str] = field(default_factory=lambda: UNIT_ALIASES)
    number_words: Mapping[str, int] = field(default_factory=lambda: NUMBER_WORDS)
    count_nouns: Mapping[str, str] = field(default_factory=lambda: COUNT_NOUNS)
    container_kinds: frozenset = CONTAINER_KINDS
    note_phrases: re.Pattern = NOTE_PHRASES
    prep_forms: Tuple[str, ...] = PREP_FORMS
    qualifiers: Tuple[str, ...] = QUALIFIERS
    estimate_words: Tuple[str, ...] = ESTIMATE_WORDS
    synonyms: Mapping[str, str] = field(default_factory=lambda: SYNONYMS)
    uninflected: frozenset = UNINFLECTED
    category_rules: Tuple[Tuple[str, Tuple[str, ...]], ...] = CATEGORY_RULES
    default_category: str = DEFAULT_CATEGORY
    actions: frozenset = ACTION_LEXICON
    tools: Tuple[str, ...] = TOOL_LEXICON
    heat_words: Tuple[str, ...] = HEAT_WORDS
    doneness_targets: Tuple[str, ...] = DONENESS_TARGETS
    step_note_cues: Tuple[str, ...] = STEP_NOTE_CUES
    detect_brands: bool = True
    brand_stopwords: frozenset = BRAND_STOPWORDS
    brand_token: re.Pattern = re.compile(r"^[A-Z][A-Za-z'’&.-]*[A-Za-z'’]$")

    def normalize_unit(self, raw: Optional[str]) -> Optional[str]:
        return normalize_unit(raw, self.unit_aliases)

    def canonical(self, phrase: str) -> str:
        return canonical_item_name(phrase, self.synonyms, self.uninflected)

    def categorize(self, item: str) -> str:
        return categorize(item, self.category_rules, self.default_category)

    def aliases_for(self, canonical: str) -> Tuple[str, ...]:
        return aliases_for(canonical, self.synonyms)


DEFAULT_LEXICON = Lexicon()
