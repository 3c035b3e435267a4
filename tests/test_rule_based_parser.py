import pytest
from recipe_engine.parsing import RecipeInput, RuleBasedParser, parse_recipe


def test_rule_based_parser_simple():
    ingredients = """
    Ingredients:
    1 cup flour
    2 eggs
    1/2 cup milk
    """
    instructions = """
    Instructions:
    1. Mix everything.
    2. Bake 20 minutes.
    """

    parser = RuleBasedParser()
    recipe = parser.parse(RecipeInput(title="Pancakes", ingredient_lines=ingredients, instruction_lines=instructions))

    assert recipe.title == "Pancakes"
    assert len(recipe.ingredients) == 3
    assert recipe.ingredients[0].item == "flour"
    assert recipe.ingredients[0].quantity.min == 1
    assert recipe.ingredients[0].unit == "cup"
    assert recipe.ingredients[1].unit == "count"

    assert len(recipe.steps) == 2
    assert recipe.steps[0].number == 1
    assert recipe.steps[0].raw == "1. Mix everything."
    assert recipe.steps[1].times[0].min == 20


def test_block_headings_are_not_parsed():
    recipe = parse_recipe(
        "Simple Pasta",
        ["What you need:", "- 500g spaghetti", "- Tomato sauce", "- Cheese"],
        ["## Method", "Boil water.", "Cook pasta.", "Add sauce."],
    )
    assert [i.item for i in recipe.ingredients] == ["spaghetti", "tomato sauce", "cheese"]
    assert len(recipe.steps) == 3
    assert recipe.ingredients[0].quantity.min == 500
    assert recipe.ingredients[0].unit == "g"


def test_sections_in_first_seen_order():
    recipe = parse_recipe(
        "Pork Chops",
        ["1 tbsp oil", "For the rub:", "2 tbsp paprika", "1 tsp cumin", "For the sauce:", "1 cup broth"],
        ["Rub the pork with paprika and cumin.", "Simmer the broth."],
    )
    assert recipe.sections == ["For the rub", "For the sauce"]
    assert [(i.item, i.section) for i in recipe.ingredients] == [
        ("oil", None),
        ("paprika", "For the rub"),
        ("cumin", "For the rub"),
        ("broth", "For the sauce"),
    ]
    assert recipe.steps[0].ingredients_ref == ["paprika", "cumin"]
    assert recipe.steps[1].ingredients_ref == ["broth"]


def test_expanded_records_keep_line_order():
    recipe = parse_recipe(None, ["1 cup flour", "Salt and pepper to taste", "2 eggs"], [])
    assert [i.item for i in recipe.ingredients] == ["flour", "salt", "black pepper", "egg"]
    assert recipe.steps == []


def test_raw_round_trip():
    ingredient_lines = ["  1 ½ cups milk ", "2 cans (14.5 oz) crushed tomatoes", "Salt and pepper to taste"]
    instruction_lines = ["  1. Preheat oven to 375°F.", "2) Bake 20 minutes, until golden.  "]
    recipe = parse_recipe("Bake", ingredient_lines, instruction_lines)

    trimmed = [line.strip() for line in ingredient_lines]
    for ing in recipe.ingredients:
        assert ing.raw in trimmed
    assert [s.raw for s in recipe.steps] == [line.strip() for line in instruction_lines]


def test_string_input_split_on_newlines():
    recipe = parse_recipe("T", "1 cup rice\r\n\r\n2 cups water\n", "Rinse the rice.\nBoil the water.")
    assert [i.item for i in recipe.ingredients] == ["rice", "water"]
    assert len(recipe.steps) == 2
    assert recipe.steps[0].ingredients_ref == ["rice"]


def test_steps_numbered_across_sections():
    recipe = parse_recipe("Pasta", ["200g pasta"], ["For the sauce:", "Simmer.", "For the pasta:", "Boil."])
    assert [(s.number, s.section) for s in recipe.steps] == [(1, "For the sauce"), (2, "For the pasta")]
    # Instruction sections are not ingredient sections
    assert recipe.sections == []


def test_same_input_twice_is_identical():
    args = (
        "Chili",
        ["For the base:", "2 tbsp olive oil", "1 onion, diced", "2 cans (15 oz) kidney beans, drained"],
        "Heat the oil over medium heat. Add the onion and cook until soft, about 5 minutes. "
        "Meanwhile, rinse the beans; stir them in and simmer 20 minutes.",
    )
    first = parse_recipe(*args)
    second = parse_recipe(*args)
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_empty_recipe():
    recipe = parse_recipe("Nothing", [], "")
    assert recipe.title == "Nothing"
    assert recipe.sections == []
    assert recipe.ingredients == []
    assert recipe.steps == []


@pytest.mark.parametrize("line", ["1) Boil water.", "Step 1: Boil water.", "1️⃣ Boil water.", "1 - Boil water."])
def test_step_marker_formats(line):
    recipe = parse_recipe("Water", [], [line, "Serve."])
    assert recipe.steps[0].actions == ["boil"]
    assert recipe.steps[0].raw == line
