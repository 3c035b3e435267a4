from recipe_engine.settings import settings


def test_ready(client):
    response = client.get("/api/ready")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "version": "0.1.0"}


def test_parse_recipe_camel_case(client):
    response = client.post(
        "/api/recipes/parse",
        json={
            "title": "Pancakes",
            "ingredients": ["1 cup flour", "2 large eggs", "Salt and pepper to taste"],
            "instructions": "Whisk the flour and eggs.\nCook over medium heat for 2 minutes.",
        },
    )
    assert response.status_code == 200

    data = response.json()
    assert data["title"] == "Pancakes"
    assert [i["item"] for i in data["ingredients"]] == ["flour", "egg", "salt", "black pepper"]

    flour = data["ingredients"][0]
    assert flour["quantity"] == {"min": 1.0}
    assert flour["unit"] == "cup"
    assert flour["toTaste"] is False
    # Unset optionals are omitted
    assert "container" not in flour
    assert "brand" not in flour

    assert data["ingredients"][2]["toTaste"] is True

    step = data["steps"][0]
    assert step["number"] == 1
    assert step["ingredientsRef"] == ["flour", "egg"]
    assert data["steps"][1]["speeds"] == ["medium heat"]
    assert data["steps"][1]["times"] == [{"min": 2.0, "unit": "min"}]


def test_parse_recipe_sections(client):
    response = client.post(
        "/api/recipes/parse",
        json={
            "ingredients": "For the sauce:\n1 cup broth\nFor the rub:\n2 tbsp paprika",
            "instructions": [],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["sections"] == ["For the sauce", "For the rub"]
    assert "title" not in data
    assert data["steps"] == []


def test_parse_recipe_missing_field(client):
    response = client.post("/api/recipes/parse", json={"ingredients": ["1 cup flour"]})
    assert response.status_code == 422


def test_parse_recipe_too_many_lines(client):
    lines = ["1 cup flour"] * (settings.max_input_lines + 1)
    response = client.post("/api/recipes/parse", json={"ingredients": lines, "instructions": []})
    assert response.status_code == 413


def test_parse_recipe_too_long(client, monkeypatch):
    monkeypatch.setattr(settings, "max_input_chars", 50)
    response = client.post(
        "/api/recipes/parse",
        json={"ingredients": "1 cup flour\n" * 5, "instructions": "Mix everything together well."},
    )
    assert response.status_code == 413


def test_parse_ingredient_line(client):
    response = client.post("/api/ingredients/parse", json={"line": "2 cans (14.5 oz) crushed tomatoes"})
    assert response.status_code == 200
    records = response.json()
    assert len(records) == 1
    assert records[0]["container"] == {"count": 2.0, "size": {"value": 14.5, "unit": "oz"}, "kind": "can"}
    assert records[0]["item"] == "crushed tomato"


def test_parse_ingredient_line_with_section(client):
    response = client.post("/api/ingredients/parse", json={"line": "Salt & pepper", "section": "For the rub"})
    assert response.status_code == 200
    records = response.json()
    assert [r["item"] for r in records] == ["salt", "black pepper"]
    assert all(r["section"] == "For the rub" for r in records)


def test_parse_ingredient_line_empty(client):
    assert client.post("/api/ingredients/parse", json={"line": ""}).status_code == 422
    response = client.post("/api/ingredients/parse", json={"line": "optional"})
    assert response.status_code == 200
    assert response.json() == []
