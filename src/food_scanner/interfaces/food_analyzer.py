"""Abstract interface for image analysis."""

from abc import ABC, abstractmethod

from ..models import FoodInfo, Recipe
from .message_transport import Attachment


class AnalysisError(Exception):
    """Raised when an image or recipe request cannot be analyzed."""


class FoodAnalyzer(ABC):
    """Abstract interface for turning images into food records."""

    @abstractmethod
    def analyze_food(self, attachment: Attachment) -> FoodInfo:
        """Identify the single most relevant food item in an image."""
        pass

    @abstractmethod
    def analyze_foods(self, attachment: Attachment, receipt: bool = False) -> list[FoodInfo]:
        """Identify every food item in a photo, or on a receipt if receipt is True."""
        pass

    @abstractmethod
    def suggest_recipes(self, foods: list[FoodInfo], preferences: str = "") -> list[Recipe]:
        """Suggest recipes that mostly use the given foods."""
        pass
