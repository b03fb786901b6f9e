from recipelens.features.recipes.domain.prompts import build_recipe_prompt


def test_ingredients_are_comma_joined_in_order():
    prompt = build_recipe_prompt(["tomato", "egg", "basil"])
    assert prompt.startswith("Based on the following ingredients: tomato, egg, basil\n")


def test_prompt_asks_for_json_recipes_shape():
    prompt = build_recipe_prompt(["rice"])
    assert "3-5 recipes" in prompt
    assert '"recipes": [' in prompt
    for field in ("name", "cuisine", "cooking_time", "difficulty", "ingredients", "instructions", "nutrition", "tips"):
        assert f'"{field}"' in prompt
    assert "Do not include any markdown formatting" in prompt


def test_ingredient_names_are_not_escaped():
    prompt = build_recipe_prompt(['"quoted"', "{braces}"])
    assert 'ingredients: "quoted", {braces}' in prompt


def test_prompt_is_deterministic():
    assert build_recipe_prompt(["a", "b"]) == build_recipe_prompt(["a", "b"])
