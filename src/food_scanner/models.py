"""Food and recipe records, and parsers for the model's JSON answers."""

import json
from dataclasses import dataclass, field
from typing import Any


class ResponseParseError(ValueError):
    """Raised when a model answer is not the expected JSON shape."""


@dataclass
class StorageInfo:
    """Shelf life of a food under one storage method."""

    food_safety_window: str = ""
    expected_expiration_date: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "StorageInfo":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ResponseParseError(f"Expected a storage object, got {type(data).__name__}")
        return cls(
            food_safety_window=_text(data.get("food_safety_window")),
            expected_expiration_date=_text(data.get("expected_expiration_date")),
        )


@dataclass
class FoodInfo:
    """A single identified food item.

    Attributes:
        food_item: Name of the food.
        barcode_number: Barcode digits, if the model could read one.
        nutrition_facts: Nutrient name to amount with unit.
        storage: Recommended storage, "room_temp" or "fridge".
        room_temp: Shelf life at room temperature.
        fridge: Shelf life in the fridge.
        food_emoji: Emoji representing the food.
        cost: Estimated price, e.g. "$3.49".
        user_id: Owner of a saved record.
        image_url: URL of the image the food was identified in.
        id: Store identifier once saved.
    """

    food_item: str = ""
    barcode_number: str = ""
    nutrition_facts: dict[str, str] = field(default_factory=dict)
    storage: str = ""
    room_temp: StorageInfo = field(default_factory=StorageInfo)
    fridge: StorageInfo = field(default_factory=StorageInfo)
    food_emoji: str = ""
    cost: str = ""
    user_id: str | None = None
    image_url: str | None = None
    id: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "FoodInfo":
        if not isinstance(data, dict):
            raise ResponseParseError(f"Expected a food object, got {type(data).__name__}")

        facts = data.get("nutrition_facts") or {}
        if not isinstance(facts, dict):
            raise ResponseParseError("nutrition_facts must be an object")

        return cls(
            food_item=_text(data.get("food_item")),
            barcode_number=_text(data.get("barcode_number")),
            nutrition_facts={str(k): _text(v) for k, v in facts.items()},
            storage=_text(data.get("storage")),
            room_temp=StorageInfo.from_dict(data.get("room_temp")),
            fridge=StorageInfo.from_dict(data.get("fridge")),
            food_emoji=_text(data.get("food_emoji")),
            cost=_text(data.get("cost")),
        )


@dataclass
class Recipe:
    """A suggested recipe."""

    recipe_name: str = ""
    description: str = ""
    number_of_servings: str = ""
    ingredients: list[str] = field(default_factory=list)
    missing_ingredients: list[str] = field(default_factory=list)
    cooking_instructions: str = ""
    additional_seasoning: str = ""
    macro_nutrients: list[str] = field(default_factory=list)
    cost: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Recipe":
        if not isinstance(data, dict):
            raise ResponseParseError(f"Expected a recipe object, got {type(data).__name__}")

        # The prompt schema historically spelled this key "additonal_seasoning"
        seasoning = data.get("additional_seasoning", data.get("additonal_seasoning"))

        return cls(
            recipe_name=_text(data.get("recipe_name")),
            description=_text(data.get("description")),
            number_of_servings=_text(data.get("number_of_servings")),
            ingredients=_text_list(data.get("ingredients")),
            missing_ingredients=_text_list(data.get("missing_ingredients")),
            cooking_instructions=_text(data.get("cooking_instructions")),
            additional_seasoning=_text(seasoning),
            macro_nutrients=_text_list(data.get("macro_nutrients")),
            cost=_text(data.get("cost")),
        )


def parse_food(text: str) -> FoodInfo:
    """Parse a single food object from a model answer."""
    data = _load_json(text)
    if isinstance(data, list):
        if len(data) != 1:
            raise ResponseParseError(f"Expected one food, got {len(data)}")
        data = data[0]
    return FoodInfo.from_dict(data)


def parse_foods(text: str) -> list[FoodInfo]:
    """Parse a list of foods, bare or wrapped as {"foods": [...]}."""
    items = _unwrap_list(_load_json(text), "foods")
    return [FoodInfo.from_dict(item) for item in items]


def parse_recipes(text: str) -> list[Recipe]:
    """Parse a list of recipes, bare or wrapped as {"recipes": [...]}."""
    items = _unwrap_list(_load_json(text), "recipes")
    return [Recipe.from_dict(item) for item in items]


def _load_json(text: str) -> Any:
    cleaned = (text or "").strip()

    # Models sometimes wrap JSON in a Markdown code fence
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]

    if not cleaned:
        raise ResponseParseError("Empty response")

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"failed to parse JSON: {e}") from e


def _unwrap_list(data: Any, key: str) -> list:
    if isinstance(data, dict):
        if key in data:
            data = data[key]
        else:
            # A single object where a list was asked for
            data = [data]

    if not isinstance(data, list):
        raise ResponseParseError(f"Expected a list of {key}")

    return data


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ResponseParseError(f"Expected a list of strings, got {type(value).__name__}")
    return [_text(v) for v in value]
