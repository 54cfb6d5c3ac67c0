"""Tests for food and recipe models."""

import json

import pytest

from food_scanner.models import (
    FoodInfo,
    Recipe,
    ResponseParseError,
    parse_food,
    parse_foods,
    parse_recipes,
)

APPLE = {
    "food_item": "Apple",
    "barcode_number": "",
    "nutrition_facts": {"calories": "95 kcal", "fiber": 4.4},
    "storage": "fridge",
    "room_temp": {"food_safety_window": 7, "expected_expiration_date": "01/08/25"},
    "fridge": {"food_safety_window": "30", "expected_expiration_date": "02/01/25"},
    "food_emoji": "🍎",
    "cost": "$0.99",
}


class TestFoodInfo:
    """Tests for FoodInfo.from_dict."""

    def test_from_dict(self):
        food = FoodInfo.from_dict(APPLE)
        assert food.food_item == "Apple"
        assert food.storage == "fridge"
        assert food.food_emoji == "🍎"
        assert food.fridge.expected_expiration_date == "02/01/25"
        assert food.id is None
        assert food.user_id is None

    def test_numbers_become_text(self):
        """Numeric values from the model are kept as strings."""
        food = FoodInfo.from_dict(APPLE)
        assert food.room_temp.food_safety_window == "7"
        assert food.nutrition_facts["fiber"] == "4.4"

    def test_missing_keys_default_empty(self):
        food = FoodInfo.from_dict({"food_item": "Water"})
        assert food.nutrition_facts == {}
        assert food.room_temp.food_safety_window == ""
        assert food.cost == ""

    def test_non_object_rejected(self):
        with pytest.raises(ResponseParseError):
            FoodInfo.from_dict(["Apple"])

    def test_bad_nutrition_facts_rejected(self):
        with pytest.raises(ResponseParseError):
            FoodInfo.from_dict({"food_item": "Apple", "nutrition_facts": "lots"})

    @pytest.mark.parametrize("storage", ["3 days", 7, ["fridge"]])
    def test_bad_storage_rejected(self, storage):
        """A storage window that is not an object is a parse error."""
        with pytest.raises(ResponseParseError):
            FoodInfo.from_dict(dict(APPLE, room_temp=storage))

    def test_null_storage_defaults_empty(self):
        food = FoodInfo.from_dict(dict(APPLE, fridge=None))
        assert food.fridge.food_safety_window == ""


class TestRecipe:
    """Tests for Recipe.from_dict."""

    def test_from_dict(self):
        recipe = Recipe.from_dict(
            {
                "recipe_name": "Toast",
                "number_of_servings": 2,
                "ingredients": ["bread 🍞"],
                "missing_ingredients": [],
                "additional_seasoning": "salt",
                "macro_nutrients": ["Carbs: 20g"],
            }
        )
        assert recipe.recipe_name == "Toast"
        assert recipe.number_of_servings == "2"
        assert recipe.ingredients == ["bread 🍞"]
        assert recipe.additional_seasoning == "salt"

    def test_misspelled_seasoning_key(self):
        """The older "additonal_seasoning" spelling is accepted."""
        recipe = Recipe.from_dict({"recipe_name": "Toast", "additonal_seasoning": "pepper"})
        assert recipe.additional_seasoning == "pepper"

    def test_string_list_field(self):
        recipe = Recipe.from_dict({"ingredients": "bread"})
        assert recipe.ingredients == ["bread"]

    @pytest.mark.parametrize("field", ["ingredients", "missing_ingredients", "macro_nutrients"])
    def test_non_list_field_rejected(self, field):
        """Numbers or objects where a list belongs are parse errors."""
        with pytest.raises(ResponseParseError):
            Recipe.from_dict({"recipe_name": "Toast", field: 5})
        with pytest.raises(ResponseParseError):
            Recipe.from_dict({"recipe_name": "Toast", field: {"a": 1}})

    def test_bad_recipe_shape_through_parser(self):
        with pytest.raises(ResponseParseError):
            parse_recipes(json.dumps({"recipes": [{"recipe_name": "Toast", "ingredients": 5}]}))


class TestParsers:
    """Tests for parse_food, parse_foods and parse_recipes."""

    def test_parse_food(self):
        assert parse_food(json.dumps(APPLE)).food_item == "Apple"

    def test_parse_food_single_item_list(self):
        assert parse_food(json.dumps([APPLE])).food_item == "Apple"

    def test_parse_food_many_items_rejected(self):
        with pytest.raises(ResponseParseError):
            parse_food(json.dumps([APPLE, APPLE]))

    def test_parse_foods_wrapped(self):
        text = json.dumps({"foods": [APPLE, dict(APPLE, food_item="Pear")]})
        assert [f.food_item for f in parse_foods(text)] == ["Apple", "Pear"]

    def test_parse_foods_bare_list(self):
        assert len(parse_foods(json.dumps([APPLE]))) == 1

    def test_parse_foods_single_object(self):
        """A lone object is treated as a one-item list."""
        assert [f.food_item for f in parse_foods(json.dumps(APPLE))] == ["Apple"]

    def test_parse_foods_empty(self):
        assert parse_foods('{"foods": []}') == []

    def test_code_fence_stripped(self):
        """JSON wrapped in a Markdown code fence still parses."""
        text = "```json\n" + json.dumps({"foods": [APPLE]}) + "\n```"
        assert parse_foods(text)[0].food_item == "Apple"

    def test_parse_recipes(self):
        text = json.dumps({"recipes": [{"recipe_name": "Toast"}, {"recipe_name": "Pie"}]})
        assert [r.recipe_name for r in parse_recipes(text)] == ["Toast", "Pie"]

    @pytest.mark.parametrize("text", ["", "   ", "not json", "```\n```", '"just a string"'])
    def test_malformed_rejected(self, text):
        with pytest.raises(ResponseParseError):
            parse_foods(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_recipes("{broken")
