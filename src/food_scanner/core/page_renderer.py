"""Page renderer for food and recipe records."""

from ..interfaces import Page, PageField
from ..models import FoodInfo, Recipe
from .text_chunker import truncate

# Discord rejects embed fields longer than this
FIELD_VALUE_LIMIT = 1024
EMPTY_FIELD = "-"

GREEN = 0x00FF00

RECIPE_THUMBNAIL_URL = (
    "https://media.discordapp.net/attachments/740596566632562763/"
    "1325175644346388530/file-WF56sz777XLvWwNMFRGaBs.png"
)


def storage_emoji(storage: str) -> str:
    """Get the emoji for a storage method."""
    kind = (storage or "").lower()
    if kind == "fridge":
        return "❄️"
    if kind == "room_temp":
        return "🏠"
    return ""


def _field(name: str, value: str, inline: bool = False) -> PageField:
    # Keep leading spaces so every bullet line lines up
    value = value.rstrip() if value.strip() else EMPTY_FIELD
    return PageField(name=name, value=truncate(value, FIELD_VALUE_LIMIT), inline=inline)


def _bullets(items: list[str]) -> str:
    return "".join(f" - {item}\n" for item in items)


class PageRenderer:
    """Renders domain records as display pages."""

    def render_food(self, info: FoodInfo) -> Page:
        """
        Render a food record.

        Args:
            info: The food to render.

        Returns:
            Page with nutrition and storage fields, thumbnailed with the
            source image.
        """
        nutrition = "".join(f" - {key}: {value}\n" for key, value in info.nutrition_facts.items())

        room = storage_emoji("room_temp")
        fridge = storage_emoji("fridge")
        storage_lines = (
            f"- {room} **Room Temperature Safety Window:** {info.room_temp.food_safety_window} days\n"
            f"- {room} **Room Temperature Expected Expiration:** {info.room_temp.expected_expiration_date}\n"
            f"- {fridge} **Fridge Safety Window:** {info.fridge.food_safety_window} days\n"
            f"- {fridge} **Fridge Expected Expiration:** {info.fridge.expected_expiration_date}\n"
        )

        fields = [
            _field("Nutrition Facts", nutrition, inline=True),
            _field("Recommended Storage", f"{info.storage} {storage_emoji(info.storage)}", inline=True),
            _field("Storage Information", storage_lines),
        ]
        if info.cost:
            fields.append(_field("Estimated Cost", info.cost, inline=True))

        return Page(
            title="Food Information",
            description=f"{info.food_emoji} {info.food_item} info".strip(),
            fields=fields,
            color=GREEN,
            thumbnail_url=info.image_url or None,
        )

    def render_recipe(self, recipe: Recipe) -> Page:
        """Render a recipe suggestion."""
        fields = [
            _field(
                f"🍽️ Serves {recipe.number_of_servings} | Ingredients",
                _bullets(recipe.ingredients),
                inline=True,
            ),
            _field("Missing ingredients", _bullets(recipe.missing_ingredients), inline=True),
            _field("Cooking Instructions", recipe.cooking_instructions),
            _field("Additional seasoning", recipe.additional_seasoning),
            _field("Macronutrients", _bullets(recipe.macro_nutrients)),
        ]

        return Page(
            title=f"Recipe: {recipe.recipe_name}",
            description=recipe.description,
            fields=fields,
            color=GREEN,
            thumbnail_url=RECIPE_THUMBNAIL_URL,
        )

    def render_foods(self, foods: list[FoodInfo]) -> list[Page]:
        return [self.render_food(food) for food in foods]

    def render_recipes(self, recipes: list[Recipe]) -> list[Page]:
        return [self.render_recipe(recipe) for recipe in recipes]
