import logging
import re
from typing import List, Optional, Sequence, Union

from ..core.text import clean_md, split_lines
from .ingredient_parser import EXPANSION_RULES, parse_ingredient_line
from .instruction_parser import parse_instructions
from .lexicon import DEFAULT_LEXICON, Lexicon
from .parser import ParsedIngredient, ParsedRecipe, RecipeInput, RecipeParser
from .sections import split_into_sections

logger = logging.getLogger("recipe_engine.parsing")

# Block labels pasted along with the lines ("Ingredients:", "Method")
BLOCK_HEADINGS = {
    "ingredients", "ingredient list", "shopping list", "what you need",
    "instructions", "directions", "method", "steps", "preparation", "how to make",
}


def is_block_heading(line: str) -> bool:
    s = re.sub(r"[:\s]+$", "", clean_md(line)).lower()
    return s in BLOCK_HEADINGS


class RuleBasedParser(RecipeParser):
    def __init__(self, lexicon: Lexicon = DEFAULT_LEXICON, rules=EXPANSION_RULES):
        self.lexicon = lexicon
        self.rules = rules

    def parse(self, recipe: RecipeInput) -> ParsedRecipe:
        ingredient_lines = [line for line in split_lines(recipe.ingredient_lines) if not is_block_heading(line)]
        instruction_lines = [line for line in split_lines(recipe.instruction_lines) if not is_block_heading(line)]

        # 1. Sections (e.g. "For the sauce:")
        blocks = split_into_sections(ingredient_lines)

        # 2. Ingredients, in section then line order
        sections: List[str] = []
        ingredients: List[ParsedIngredient] = []
        for block in blocks:
            if block.section and block.section not in sections:
                sections.append(block.section)
            for line in block.lines:
                ingredients.extend(parse_ingredient_line(line, block.section, self.lexicon, self.rules))

        # 3. Steps, linked against the parsed ingredients
        steps = parse_instructions(instruction_lines, ingredients, self.lexicon)

        logger.debug(
            f"Parsed recipe {recipe.title!r}: {len(sections)} sections, "
            f"{len(ingredients)} ingredients, {len(steps)} steps"
        )
        return ParsedRecipe(title=recipe.title, sections=sections, ingredients=ingredients, steps=steps)


def parse_recipe(
    title: Optional[str] = None,
    ingredient_lines: Union[Sequence[str], str] = (),
    instruction_lines: Union[Sequence[str], str] = (),
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> ParsedRecipe:
    """Parse a recipe's title, ingredient lines and instruction lines in one call."""
    recipe = RecipeInput(
        title=title,
        ingredient_lines=ingredient_lines if isinstance(ingredient_lines, str) else list(ingredient_lines),
        instruction_lines=instruction_lines if isinstance(instruction_lines, str) else list(instruction_lines),
    )
    return RuleBasedParser(lexicon).parse(recipe)
