from .lexicon import Lexicon, DEFAULT_LEXICON
from .parser import (
    RecipeParser, RecipeInput, ParsedRecipe, ParsedIngredient, ParsedStep,
    Quantity, ContainerInfo, ContainerSize, Temperature, Duration,
)
from .quantity import parse_quantity_and_unit
from .sections import split_into_sections
from .ingredient_parser import parse_ingredient_line
from .instruction_parser import parse_instructions
from .rule_based_parser import RuleBasedParser, parse_recipe

__all__ = [
    "Lexicon", "DEFAULT_LEXICON",
    "RecipeParser", "RecipeInput", "ParsedRecipe", "ParsedIngredient", "ParsedStep",
    "Quantity", "ContainerInfo", "ContainerSize", "Temperature", "Duration",
    "parse_quantity_and_unit", "split_into_sections", "parse_ingredient_line",
    "parse_instructions", "RuleBasedParser", "parse_recipe",
]
