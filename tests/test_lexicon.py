import dataclasses

import pytest
from recipe_engine.parsing.lexicon import (
    CANONICAL_UNITS, COUNT_NOUNS, DEFAULT_LEXICON, UNIT_ALIASES, Lexicon, aliases_for,
    canonical_item_name, categorize,
    is_countable_unit, normalize_unit, plural_forms, singularize_word,
)


def test_unit_normalization_is_idempotent():
    for alias in UNIT_ALIASES:
        once = normalize_unit(alias)
        assert once is not None
        assert normalize_unit(once) == once


@pytest.mark.parametrize("raw,expected", [
    ("Tablespoons", "tbsp"),
    ("Tbsp.", "tbsp"),
    ("fl. oz", "floz"),
    ("fl-oz", "floz"),
    ("Fluid Ounces", "floz"),
    ("LBS", "lb"),
    ("pkg", "package"),
    ("pieces", "count"),
])
def test_normalize_unit_aliases(raw, expected):
    assert normalize_unit(raw) == expected


def test_normalize_unit_unknown():
    assert normalize_unit("handfuls") is None
    assert normalize_unit("") is None
    assert normalize_unit(None) is None


def test_countable_units():
    assert is_countable_unit("clove")
    assert is_countable_unit("can")
    assert not is_countable_unit("cup")
    assert not is_countable_unit(None)


@pytest.mark.parametrize("word,expected", [
    ("tomatoes", "tomato"),
    ("berries", "berry"),
    ("peaches", "peach"),
    ("radishes", "radish"),
    ("leaves", "leaf"),
    ("onions", "onion"),
    ("asparagus", "asparagus"),
    ("hummus", "hummus"),
    ("molasses", "molasses"),
    ("peas", "pea"),
    ("bass", "bass"),
    ("oats", "oat"),
])
def test_singularize_word(word, expected):
    assert singularize_word(word) == expected


def test_canonical_item_name_folds_synonyms():
    assert canonical_item_name("Scallions") == "green onion"
    assert canonical_item_name("spring onions") == "green onion"
    assert canonical_item_name("Garbanzo Beans") == "chickpea"
    assert canonical_item_name("red  onions") == "red onion"


def test_categorize_prefix_then_head_noun():
    assert categorize("chicken thigh") == "meat"
    assert categorize("shredded cheddar cheese") == "dairy"
    assert categorize("smoked salmon") == "seafood"
    assert categorize("frozen pea") == "frozen"
    assert categorize("something unknown") == "pantry"
    assert categorize("") == "pantry"


def test_aliases_for_lists_canonical_first():
    aliases = aliases_for("green onion")
    assert aliases[0] == "green onion"
    assert "scallion" in aliases
    assert "spring onion" in aliases


def test_lexicon_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_LEXICON.unit_aliases["pinches"] = "cup"
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_LEXICON.detect_brands = False


def test_lexicon_tables_are_replaceable():
    rules = (("snack", ("chip",)),) + DEFAULT_LEXICON.category_rules
    custom = dataclasses.replace(DEFAULT_LEXICON, category_rules=rules, default_category="misc")
    assert isinstance(custom, Lexicon)
    assert custom.categorize("chip") == "snack"
    assert custom.categorize("mystery item") == "misc"
    # The shared default is untouched
    assert DEFAULT_LEXICON.categorize("chip") == "pantry"


def test_alias_targets_are_canonical_units():
    assert set(UNIT_ALIASES.values()) <= CANONICAL_UNITS
    for unit in COUNT_NOUNS.values():
        assert is_countable_unit(unit)


@pytest.mark.parametrize("phrase,expected", [
    ("cherry", ("cherries",)),
    ("anchovy", ("anchovies",)),
    ("chili", ("chilies",)),
    ("bay leaf", ("bay leaves",)),
    ("turkey", ()),
    ("flour", ()),
    ("", ()),
])
def test_plural_forms(phrase, expected):
    assert plural_forms(phrase) == expected
