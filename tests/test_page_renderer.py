"""Tests for the PageRenderer module."""

import pytest

from food_scanner.core.page_renderer import (
    EMPTY_FIELD,
    FIELD_VALUE_LIMIT,
    PageRenderer,
    storage_emoji,
)
from food_scanner.models import FoodInfo, Recipe


class TestStorageEmoji:
    """Tests for storage_emoji."""

    @pytest.mark.parametrize(
        "storage,expected",
        [("fridge", "❄️"), ("FRIDGE", "❄️"), ("room_temp", "🏠"), ("freezer", ""), ("", "")],
    )
    def test_storage_emoji(self, storage, expected):
        assert storage_emoji(storage) == expected


class TestRenderFood:
    """Tests for PageRenderer.render_food."""

    def test_title_and_description(self, sample_foods):
        """Food pages are titled and describe the item with its emoji."""
        page = PageRenderer().render_food(sample_foods[0])
        assert page.title == "Food Information"
        assert page.description == "🍎 Apple info"
        assert page.color == 0x00FF00

    def test_nutrition_field(self, sample_foods):
        """Each nutrition fact becomes a bullet line."""
        page = PageRenderer().render_food(sample_foods[0])
        nutrition = page.fields[0]
        assert nutrition.name == "Nutrition Facts"
        assert nutrition.inline is True
        assert " - calories: 95 kcal" in nutrition.value
        assert " - protein: 0.5 g" in nutrition.value
        assert nutrition.value.startswith(" - calories")

    def test_storage_fields(self, sample_foods):
        """Storage recommendation and shelf life are shown."""
        page = PageRenderer().render_food(sample_foods[0])
        names = [f.name for f in page.fields]
        assert "Recommended Storage" in names
        storage = page.fields[names.index("Recommended Storage")]
        assert storage.value == "fridge ❄️"

        info = page.fields[names.index("Storage Information")]
        assert "**Room Temperature Safety Window:** 7 days" in info.value
        assert "**Fridge Expected Expiration:** 02/01/25" in info.value

    def test_thumbnail_from_image_url(self, sample_foods):
        food = sample_foods[0]
        food.image_url = "https://cdn.example.com/apple.png"
        page = PageRenderer().render_food(food)
        assert page.thumbnail_url == "https://cdn.example.com/apple.png"

    def test_no_image_no_thumbnail(self, sample_foods):
        assert PageRenderer().render_food(sample_foods[0]).thumbnail_url is None

    def test_empty_values_get_placeholder(self):
        """Empty fields are filled so the embed stays valid."""
        page = PageRenderer().render_food(FoodInfo(food_item="Mystery"))
        assert page.fields[0].value == EMPTY_FIELD
        assert all(f.value for f in page.fields)

    def test_long_values_are_truncated(self):
        """Field values never exceed the embed field limit."""
        facts = {f"nutrient{i}": "x" * 50 for i in range(100)}
        page = PageRenderer().render_food(FoodInfo(food_item="Big", nutrition_facts=facts))
        assert len(page.fields[0].value) <= FIELD_VALUE_LIMIT
        assert page.fields[0].value.endswith("...")

    def test_render_is_pure(self, sample_foods):
        """Rendering twice gives equal pages."""
        renderer = PageRenderer()
        assert renderer.render_food(sample_foods[0]) == renderer.render_food(sample_foods[0])

    def test_render_foods(self, sample_foods):
        pages = PageRenderer().render_foods(sample_foods)
        assert [p.description for p in pages] == ["🍎 Apple info", "🍞 Bread info"]


class TestRenderRecipe:
    """Tests for PageRenderer.render_recipe."""

    def test_recipe_page(self, sample_recipe):
        page = PageRenderer().render_recipe(sample_recipe)
        assert page.title == "Recipe: Apple Toast"
        assert page.description == "Toasted bread with apple slices."

        names = [f.name for f in page.fields]
        assert names == [
            "🍽️ Serves 2 | Ingredients",
            "Missing ingredients",
            "Cooking Instructions",
            "Additional seasoning",
            "Macronutrients",
        ]
        assert " - 1 apple 🍎" in page.fields[0].value
        assert " - cinnamon" in page.fields[1].value
        assert page.thumbnail_url

    def test_recipe_without_missing_ingredients(self):
        page = PageRenderer().render_recipe(Recipe(recipe_name="Toast"))
        assert page.fields[1].value == EMPTY_FIELD
