from recipe_engine.parsing import split_into_sections
from recipe_engine.parsing.sections import section_header


def test_two_sections_in_order():
    blocks = split_into_sections(["For the sauce:", "1 cup broth", "For the rub:", "2 tbsp paprika"])
    assert len(blocks) == 2
    assert blocks[0].section == "For the sauce"
    assert blocks[0].lines == ["1 cup broth"]
    assert blocks[1].section == "For the rub"
    assert blocks[1].lines == ["2 tbsp paprika"]


def test_lines_before_first_header_are_unnamed():
    blocks = split_into_sections(["2 eggs", "", "FOR THE TOPPING", "1 cup cream"])
    assert blocks[0].section is None
    assert blocks[0].lines == ["2 eggs"]
    assert blocks[1].section == "FOR THE TOPPING"


def test_blank_lines_and_empty_blocks_dropped():
    blocks = split_into_sections(["", "For the sauce:", "   ", "For the rub:", "1 tsp salt"])
    assert len(blocks) == 1
    assert blocks[0].section == "For the rub"


def test_every_line_lands_in_one_block():
    lines = ["1 cup flour", "For the glaze:", "1 cup sugar", "2 tbsp milk", "For serving:", "berries"]
    blocks = split_into_sections(lines)
    assigned = [line for block in blocks for line in block.lines]
    assert assigned == ["1 cup flour", "1 cup sugar", "2 tbsp milk", "berries"]


def test_markdown_header():
    assert section_header("**For the dressing:**") == "For the dressing"
    assert section_header("## For the crust") == "For the crust"


def test_not_headers():
    assert section_header("For serving: lemon wedges") is None
    assert section_header("1 cup flour") is None
    assert section_header("For " + "x" * 60 + ":") is None


def test_strict_requires_colon():
    assert section_header("For best results chill overnight.", strict=True) is None
    assert section_header("For the sauce:", strict=True) == "For the sauce"
