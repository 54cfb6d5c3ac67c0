"""Pytest configuration and fixtures."""

import itertools
import threading
from dataclasses import replace

import pytest

from food_scanner.interfaces import (
    AnalysisError,
    Attachment,
    FoodAnalyzer,
    IncomingMessage,
    MessageTransport,
    Page,
    TransportError,
)
from food_scanner.models import FoodInfo, Recipe, StorageInfo


class RecordingTransport(MessageTransport):
    """Transport that records everything sent through it."""

    def __init__(self):
        self._ids = itertools.count(1000)
        self._lock = threading.Lock()
        self.message_callbacks = []
        self.navigation_callbacks = []
        self.created = []  # (channel_id, message_id, page, affordances)
        self.edits = []  # (channel_id, message_id, page, affordances)
        self.texts = []  # (channel_id, text)
        self.typing = []
        self.fail_create = False
        self.fail_edit = False
        self.connected = False
        # Called with no arguments just before create_message returns
        self.during_create = None
        # Called with the edit tuple after each edit is recorded
        self.after_edit = None

    def create_message(self, channel_id, page, affordances=None):
        if self.fail_create:
            raise TransportError("create failed")
        with self._lock:
            message_id = str(next(self._ids))
            self.created.append((channel_id, message_id, page, affordances))
        if self.during_create is not None:
            self.during_create()
        return message_id

    def edit_message(self, channel_id, message_id, page, affordances):
        with self._lock:
            self.edits.append((channel_id, message_id, page, affordances))
        if self.after_edit is not None:
            self.after_edit((channel_id, message_id, page, affordances))
        if self.fail_edit:
            raise TransportError("edit failed")

    def send_text(self, channel_id, text):
        self.texts.append((channel_id, text))

    def send_typing(self, channel_id):
        self.typing.append(channel_id)

    def on_message(self, callback):
        self.message_callbacks.append(callback)

    def on_navigation(self, callback):
        self.navigation_callbacks.append(callback)

    def connect(self):
        self.connected = True

    def disconnect(self):
        self.connected = False

    def simulate_message(self, content, author_id="user1", channel_id="chan1", attachments=()):
        """Simulate receiving a chat message."""
        message = IncomingMessage(
            message_id="m1",
            channel_id=channel_id,
            author_id=author_id,
            content=content,
            attachments=tuple(attachments),
        )
        for callback in self.message_callbacks:
            callback(message)

    def simulate_click(self, message_id, direction):
        """Simulate a navigation button click."""
        for callback in self.navigation_callbacks:
            callback(message_id, direction)


class FakeAnalyzer(FoodAnalyzer):
    """Analyzer that returns canned foods and recipes."""

    def __init__(self, foods=None, recipes=None, fail=False):
        self.foods = foods or []
        self.recipes = recipes or []
        self.fail = fail
        self.calls = []

    def analyze_food(self, attachment):
        self.calls.append(("analyze_food", attachment))
        if self.fail or not attachment.is_image:
            raise AnalysisError("cannot analyze")
        return replace(self.foods[0], image_url=attachment.url)

    def analyze_foods(self, attachment, receipt=False):
        self.calls.append(("analyze_foods", attachment, receipt))
        if self.fail or not attachment.is_image:
            raise AnalysisError("cannot analyze")
        return [replace(food, image_url=attachment.url) for food in self.foods]

    def suggest_recipes(self, foods, preferences=""):
        self.calls.append(("suggest_recipes", [f.food_item for f in foods], preferences))
        if self.fail:
            raise AnalysisError("cannot suggest")
        return list(self.recipes)


def make_food(name, emoji="🍎", storage="fridge"):
    return FoodInfo(
        food_item=name,
        barcode_number="012345",
        nutrition_facts={"calories": "95 kcal", "protein": "0.5 g"},
        storage=storage,
        room_temp=StorageInfo(food_safety_window="7", expected_expiration_date="01/08/25"),
        fridge=StorageInfo(food_safety_window="30", expected_expiration_date="02/01/25"),
        food_emoji=emoji,
        cost="$0.99",
    )


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def pages():
    """Three distinct pages."""
    return [Page(title=f"Page {i}") for i in range(3)]


@pytest.fixture
def sample_foods():
    return [make_food("Apple"), make_food("Bread", emoji="🍞", storage="room_temp")]


@pytest.fixture
def sample_recipe():
    return Recipe(
        recipe_name="Apple Toast",
        description="Toasted bread with apple slices.",
        number_of_servings="2",
        ingredients=["2 slices of bread 🍞", "1 apple 🍎"],
        missing_ingredients=["cinnamon"],
        cooking_instructions="1. Toast bread\n2. Add apple",
        additional_seasoning="A pinch of cinnamon",
        macro_nutrients=["Protein: 4g", "Carbs: 30g"],
        cost="$1.50",
    )


@pytest.fixture
def image_attachment():
    return Attachment(
        url="https://cdn.example.com/apple.png",
        filename="apple.png",
        content_type="image/png",
        size=1234,
    )


@pytest.fixture
def text_attachment():
    return Attachment(
        url="https://cdn.example.com/notes.txt",
        filename="notes.txt",
        content_type="text/plain",
        size=10,
    )
