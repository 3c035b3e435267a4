"""Pydantic schemas for the recipe engine API.

Request models for:
- Whole-recipe parsing
- Single ingredient lines
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class ParseRecipeRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=300)
    ingredients: Union[list[str], str]
    instructions: Union[list[str], str]


class ParseLineRequest(BaseModel):
    line: str = Field(..., min_length=1, max_length=1000)
    section: Optional[str] = Field(None, max_length=100)
