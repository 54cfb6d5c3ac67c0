"""Vision model integration for food and receipt images.

Talks to any OpenAI-compatible chat completions endpoint. The default
configuration points at Gemini's OpenAI-compatible API.
"""

import base64
import logging

import requests
from openai import OpenAI, OpenAIError

from ..interfaces import AnalysisError, Attachment, FoodAnalyzer
from ..models import FoodInfo, Recipe, ResponseParseError, parse_food, parse_foods, parse_recipes
from . import prompts

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class VisionAnalyzer(FoodAnalyzer):
    """Food analyzer backed by a multimodal chat model."""

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str | None = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        download_timeout: float = 30.0,
        client: OpenAI | None = None,
        http: requests.Session | None = None,
    ):
        """
        Initialize the analyzer.

        Args:
            api_key: API key for the model endpoint.
            model: Model name.
            base_url: OpenAI-compatible endpoint, or None for OpenAI itself.
            timeout: Seconds to wait for a model answer.
            download_timeout: Seconds to wait for an image download.
            client: Preconfigured OpenAI client (mainly for tests).
            http: requests session used to download images.
        """
        self.model = model
        self.download_timeout = download_timeout
        self._client = client or OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self._http = http or requests.Session()

    def analyze_food(self, attachment: Attachment) -> FoodInfo:
        """
        Identify the most relevant food item in an image.

        Raises:
            AnalysisError: If the download, model call or parsing fails.
        """
        result = self._ask_about_image(attachment, prompts.single_food_prompt())
        try:
            food = parse_food(result)
        except ResponseParseError as e:
            logger.error(f"Error parsing food: {e}")
            logger.error(f"Raw result: {result}")
            raise AnalysisError(f"Could not parse model answer: {e}") from e

        food.image_url = attachment.url
        return food

    def analyze_foods(self, attachment: Attachment, receipt: bool = False) -> list[FoodInfo]:
        """
        Identify every food item in a photo or on a receipt.

        Raises:
            AnalysisError: If the download, model call or parsing fails.
        """
        prompt = prompts.receipt_foods_prompt() if receipt else prompts.photo_foods_prompt()
        result = self._ask_about_image(attachment, prompt)
        try:
            foods = parse_foods(result)
        except ResponseParseError as e:
            logger.error(f"Error parsing foods: {e}")
            logger.error(f"Raw result: {result}")
            raise AnalysisError(f"Could not parse model answer: {e}") from e

        for food in foods:
            food.image_url = attachment.url
        logger.info(f"Identified {len(foods)} food(s) in {attachment.filename}")
        return foods

    def suggest_recipes(self, foods: list[FoodInfo], preferences: str = "") -> list[Recipe]:
        """
        Ask the model for recipes using the given foods.

        Raises:
            AnalysisError: If the model call or parsing fails.
        """
        prompt = prompts.recipes_prompt([food.food_item for food in foods], preferences)
        result = self._complete([{"type": "text", "text": prompt}])
        try:
            return parse_recipes(result)
        except ResponseParseError as e:
            logger.error(f"Error parsing recipes: {e}")
            logger.error(f"Raw result: {result}")
            raise AnalysisError(f"Could not parse model answer: {e}") from e

    def download_image(self, url: str) -> bytes:
        """
        Download image bytes.

        Raises:
            AnalysisError: On network errors or a non-200 response.
        """
        try:
            response = self._http.get(url, timeout=self.download_timeout)
        except requests.RequestException as e:
            raise AnalysisError(f"failed to fetch image: {e}") from e

        if response.status_code != 200:
            raise AnalysisError(f"bad response: {response.status_code} {response.reason}")

        return response.content

    def _ask_about_image(self, attachment: Attachment, prompt: str) -> str:
        if not attachment.is_image:
            raise AnalysisError(f"attachment is not an image: {attachment.url}")

        logger.info(f"Attachment is an image: <{attachment.url}>")
        image = self.download_image(attachment.url)
        encoded = base64.b64encode(image).decode("ascii")

        return self._complete(
            [
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{attachment.content_type};base64,{encoded}"},
                },
                {"type": "text", "text": prompt},
            ]
        )

    def _complete(self, content: list[dict]) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": content}],
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            raise AnalysisError(f"Model request failed: {e}") from e

        if not response.choices:
            raise AnalysisError("Model returned no candidates")

        return (response.choices[0].message.content or "").strip()
