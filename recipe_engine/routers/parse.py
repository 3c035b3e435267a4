"""Parsing endpoints: whole recipes and single ingredient lines."""

import logging
from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..core.text import split_lines
from ..deps import get_parser
from ..parsing import ParsedIngredient, ParsedRecipe, RecipeInput, RuleBasedParser, parse_ingredient_line
from ..schemas import ParseLineRequest, ParseRecipeRequest
from ..settings import settings

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)
logger = logging.getLogger("recipe_engine.api")


def _input_size(value: Union[List[str], str]) -> tuple[int, int]:
    """(characters, non-blank lines) of one input field."""
    if isinstance(value, str):
        return len(value), len(split_lines(value))
    return sum(len(v) for v in value), len(split_lines(value))


def _check_bounds(payload: ParseRecipeRequest) -> None:
    chars_i, lines_i = _input_size(payload.ingredients)
    chars_s, lines_s = _input_size(payload.instructions)
    chars = chars_i + chars_s + len(payload.title or "")
    lines = lines_i + lines_s
    if chars > settings.max_input_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Recipe text too long ({chars} chars, max {settings.max_input_chars})",
        )
    if lines > settings.max_input_lines:
        raise HTTPException(
            status_code=413,
            detail=f"Too many lines ({lines}, max {settings.max_input_lines})",
        )


@router.post("/recipes/parse", response_model=ParsedRecipe, response_model_exclude_none=True)
@limiter.limit(settings.parse_rate_limit)
def parse_recipe_text(
    request: Request,  # Required for rate limiter
    payload: ParseRecipeRequest,
    parser: RuleBasedParser = Depends(get_parser),
):
    """Parse ingredient lines and instructions into structured records."""
    _check_bounds(payload)

    result = parser.parse(RecipeInput(
        title=payload.title,
        ingredient_lines=payload.ingredients,
        instruction_lines=payload.instructions,
    ))
    logger.info(
        f"Parsed recipe {payload.title!r}: {len(result.ingredients)} ingredients, "
        f"{len(result.steps)} steps, {len(result.sections)} sections"
    )
    return result


@router.post("/ingredients/parse", response_model=List[ParsedIngredient], response_model_exclude_none=True)
@limiter.limit(settings.parse_rate_limit)
def parse_ingredient(
    request: Request,  # Required for rate limiter
    payload: ParseLineRequest,
    parser: RuleBasedParser = Depends(get_parser),
):
    """Parse one ingredient line; compound lines may yield several records."""
    records = parse_ingredient_line(payload.line, payload.section, parser.lexicon, parser.rules)
    logger.info(f"Parsed ingredient line into {len(records)} record(s)")
    return records
