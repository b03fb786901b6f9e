# src/recipelens/features/recipes/domain/prompts.py
from typing import Sequence

RECIPE_RECOMMENDER_PROMPT = """Based on the following ingredients: {ingredients}

Please recommend 3-5 recipes that can be made with these ingredients. For each recipe, provide:
1. Recipe name
2. Cuisine type
3. Cooking time (in minutes)
4. Difficulty level (Easy, Medium, Hard)
5. List of ingredients needed
6. Step-by-step cooking instructions
7. Nutritional information (brief)
8. Cooking tips

Format your response as a JSON object with the following structure:
{{
  "recipes": [
    {{
      "name": "Recipe Name",
      "cuisine": "Cuisine Type",
      "cooking_time": "30 minutes",
      "difficulty": "Easy",
      "ingredients": ["ingredient 1", "ingredient 2"],
      "instructions": ["step 1", "step 2"],
      "nutrition": "brief nutrition info",
      "tips": "cooking tips"
    }}
  ]
}}

Make sure the JSON is valid and properly formatted.
Do not include any markdown formatting, explanation, or text outside the JSON object."""


def build_recipe_prompt(ingredients: Sequence[str]) -> str:
    return RECIPE_RECOMMENDER_PROMPT.format(ingredients=", ".join(ingredients))
