from abc import ABC, abstractmethod
from typing import Optional, List, Literal, Union
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    # Immutable once built; JSON uses the camelCase names consumers already expect.
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Quantity(_Record):
    min: Optional[float] = None
    max: Optional[float] = None
    text: Optional[str] = None  # "a pinch", "a handful"

    @property
    def is_absent(self) -> bool:
        return self.min is None and self.text is None


class ContainerSize(_Record):
    value: float
    unit: str


class ContainerInfo(_Record):
    count: Optional[float] = None
    size: Optional[ContainerSize] = None
    kind: Optional[Literal["can", "jar", "package", "bottle"]] = None


class ParsedIngredient(_Record):
    raw: str
    section: Optional[str] = None
    quantity: Optional[Quantity] = None
    unit: Optional[str] = None
    item: str
    container: Optional[ContainerInfo] = None
    forms: Optional[List[str]] = None
    notes: Optional[List[str]] = None
    alternatives: Optional[List[str]] = None
    to_taste: bool = False
    estimated: bool = False
    brand: Optional[str] = None
    qualifiers: Optional[List[str]] = None
    category: str = "pantry"


class Temperature(_Record):
    value: int
    unit: Literal["F", "C"]


class Duration(_Record):
    min: Optional[float] = None
    max: Optional[float] = None
    unit: Literal["s", "min", "h"]


class ParsedStep(_Record):
    raw: str
    number: int
    section: Optional[str] = None
    actions: List[str] = []
    ingredients_ref: Optional[List[str]] = None
    tools: Optional[List[str]] = None
    temperatures: List[Temperature] = []
    times: List[Duration] = []
    speeds: List[str] = []
    doneness: List[str] = []
    concurrency: bool = False
    yields: Optional[List[str]] = None
    notes: Optional[List[str]] = None


class ParsedRecipe(_Record):
    title: Optional[str] = None
    sections: List[str] = []
    ingredients: List[ParsedIngredient] = []
    steps: List[ParsedStep] = []


class RecipeInput(_Record):
    title: Optional[str] = None
    ingredient_lines: Union[List[str], str] = []
    instruction_lines: Union[List[str], str] = []


class RecipeParser(ABC):
    @abstractmethod
    def parse(self, recipe: RecipeInput) -> ParsedRecipe:
        """Parse raw recipe input into a structured ParsedRecipe."""
        pass
