"""Prompt templates for the vision model."""

from datetime import date


def _escape(template: str) -> str:
    return template.replace("{", "{{").replace("}", "}}")


_STORAGE_SCHEMA = """"storage": "string (room_temp or fridge)",
  "room_temp": {
    "food_safety_window": "number (days)", # int formatted as string
    "expected_expiration_date": "date" # maximum expiration in MM/DD/YY starting from tomorrow's date when stored at room temperature
  },
  "fridge": {
    "food_safety_window": "number (days)", # int formatted as string
    "expected_expiration_date": "date" # maximum expiration in MM/DD/YY starting from tomorrow's date when stored in fridge
  },
  "food_emoji": "emoji representing food item",
  "cost": "estimated price in dollars and cents" # e.g $D.CC"""

_FOOD_SCHEMA = """{
  "food_item": "string",
  "barcode_number": "string", # int formatted as string
  "nutrition_facts": {
    ...
  },
  """ + _STORAGE_SCHEMA + """
}"""

_RECEIPT_FOOD_SCHEMA = """{
  "food_item": "string",
  "nutrition_facts": {
    ...
  },
  """ + _STORAGE_SCHEMA + """
}"""

_STEPS = """3. List the likely nutrition facts (only include the calories and other macronutrients) with exact figures and units.
4. Specify the most common storage method (choose between "room_temp" or "fridge").
5. Estimate the food safety window (in days) and estimated food expiration date for both "room_temp" and "fridge"."""

SINGLE_FOOD_PROMPT = """Today's date: {today}. From the provided image:
1. Identify the food item most relevant for a nutritionist.
2. Provide the barcode number.
""" + _STEPS + """
6. Return the output in the following JSON schema:
---

### JSON Schema
""" + _escape(_FOOD_SCHEMA)

PHOTO_FOODS_PROMPT = """Today's date: {today}.
For all foods in the image:

1. Identify the food item most relevant for a nutritionist.
2. Provide the barcode number.
""" + _STEPS + """
6. Return the output as an object with a "foods" list in the following JSON schema:
---

### JSON Schema
{{"foods": [""" + _escape(_FOOD_SCHEMA) + """, ...]}}"""

RECEIPT_FOODS_PROMPT = """Today's date: {today}.
The image should be a receipt from the store.
For all the foods that are listed in the receipt:

1. Identify the full name of the food item most relevant for a nutritionist.
2. Use the price on the receipt as the cost.
""" + _STEPS + """
6. Return the output as an object with a "foods" list in the following JSON schema:
---

### JSON Schema
{{"foods": [""" + _escape(_RECEIPT_FOOD_SCHEMA) + """, ...]}}"""

RECIPES_PROMPT = """I have the following foods in my fridge or pantry:
{foods}

Please recommend 3 recipes that primarily use ingredients from this list. The recipes should:

1. Strongly prioritize using ingredients from the list.
2. Allow for occasional deviations by including a few ingredients not on the list, but only if they are essential to complete the dish and are common or easy to substitute (e.g., butter, garlic, or spices) OR if it is necessary to fulfill the user's special preferences.
3. Provide the name of the dish, the required ingredients, and a brief preparation method.

If you include ingredients not on the list, please clearly indicate them and suggest potential substitutions using items I might already have. Feel free to suggest creative or healthier variations for each recipe. If the user preferences are not empty, each recipe should strongly relate to the user's preference. The user added these preferences: {preferences}

Output an object with a "recipes" list in the following JSON schema:

{{"recipes": [{{
  "recipe_name": "string",
  "description": "string",
  "number_of_servings": "string", # int formatted as string
  "ingredients": ["string1", "string2", ...], # each ingredient and emoji e.g 2 tbsp of olive oil 🫒 (includes all ingredients)
  "missing_ingredients": [], # list of each ingredient missing from fridge or pantry
  "cooking_instructions": "string", # markdown formatted step-by-step preparation and cooking instructions, use new line characters
  "additional_seasoning": "string", # markdown formatted suggestions for additional seasoning of dish
  "macro_nutrients": [], # a list of strings containing the macronutrient content (per serving) for the dish in grams
  "cost": "estimated price in dollars and cents" # e.g $D.CC
}}, ...]}}"""


def single_food_prompt(today: date | None = None) -> str:
    return SINGLE_FOOD_PROMPT.format(today=today or date.today())


def photo_foods_prompt(today: date | None = None) -> str:
    return PHOTO_FOODS_PROMPT.format(today=today or date.today())


def receipt_foods_prompt(today: date | None = None) -> str:
    return RECEIPT_FOODS_PROMPT.format(today=today or date.today())


def recipes_prompt(food_names: list[str], preferences: str = "") -> str:
    return RECIPES_PROMPT.format(
        foods="[" + ", ".join(food_names) + "]",
        preferences=preferences or "none",
    )
