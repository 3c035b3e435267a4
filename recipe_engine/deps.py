"""FastAPI dependencies for the recipe engine API.

Provides:
- The shared rule-based parser, configured from settings
"""

import dataclasses
from functools import lru_cache

from .parsing import DEFAULT_LEXICON, RuleBasedParser
from .settings import settings


@lru_cache(maxsize=1)
def get_parser() -> RuleBasedParser:
    """Build the parser once; the lexicon honours settings.brand_detection."""
    lexicon = DEFAULT_LEXICON
    if lexicon.detect_brands != settings.brand_detection:
        lexicon = dataclasses.replace(lexicon, detect_brands=settings.brand_detection)
    return RuleBasedParser(lexicon)
