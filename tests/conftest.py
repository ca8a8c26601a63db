import json
from typing import List, Optional

import httpx
import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from recipe_chef.schema import Err, ErrorInfo, ErrorKind, Ok, Recipe

RECIPE_PAYLOAD = {
    "recipeName": "Lemon Garlic Chicken",
    "description": "Juicy chicken breast with a bright lemon and garlic pan sauce.",
    "prepTime": "10 minutes",
    "cookTime": "20 minutes",
    "ingredients": ["2 chicken breasts", "1 lemon", "3 cloves garlic", "2 tbsp olive oil"],
    "instructions": [
        "Season the chicken.",
        "Sear in olive oil until golden.",
        "Add garlic and lemon juice, then simmer.",
    ],
}

IMAGE_RESPONSE = {
    "candidates": [
        {
            "content": {
                "parts": [
                    {"text": "Here is your dish."},
                    {"inlineData": {"mimeType": "image/png", "data": "aW1hZ2U="}},
                ]
            }
        }
    ]
}


class FailingChatModel(FakeListChatModel):
    """Chat model whose every call fails like an unreachable provider."""

    def _call(self, *args, **kwargs):
        raise ConnectionError("provider unreachable")

    def _stream(self, *args, **kwargs):
        raise ConnectionError("provider unreachable")

    async def _astream(self, *args, **kwargs):
        raise ConnectionError("provider unreachable")
        yield  # pragma: no cover


def fake_llm(*responses: str) -> FakeListChatModel:
    return FakeListChatModel(responses=list(responses))


def image_transport(payload=None, status_code: int = 200, content: Optional[bytes] = None, requests: Optional[list] = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=payload if payload is not None else {})

    return httpx.MockTransport(handler)


def make_recipe(name: str = "Lemon Garlic Chicken") -> Recipe:
    return Recipe(**{**RECIPE_PAYLOAD, "recipeName": name})


def provider_err(message: str = "Failed to communicate with the recipe AI.") -> Err:
    return Err(error=ErrorInfo(kind=ErrorKind.PROVIDER, message=message, detail="boom"))


class FakeGenerationClient:
    """Stands in for GenerationClient in view tests and records every call.

    Each list of results is consumed in call order; the last entry repeats.
    """

    def __init__(self, recipe_results=(), image_results=(), suggestion_results=()):
        self.recipe_results: List = list(recipe_results) or [Ok(value=make_recipe())]
        self.image_results: List = list(image_results) or [Ok(value="data:image/png;base64,aW1hZ2U=")]
        self.suggestion_results: List = list(suggestion_results) or [Ok(value=["salt", "pepper"])]
        self.recipe_calls: List[str] = []
        self.image_calls: List[tuple] = []
        self.suggestion_calls: List[str] = []

        # Set both events of a pair to hold the first call until released
        self.first_recipe_started = None
        self.release_first_recipe = None
        self.first_suggestion_started = None
        self.release_first_suggestion = None

    @staticmethod
    def _next(results: List, calls: List):
        return results[min(len(calls), len(results)) - 1]

    async def generate_recipe(self, ingredients: str):
        self.recipe_calls.append(ingredients)
        result = self._next(self.recipe_results, self.recipe_calls)
        if self.release_first_recipe is not None and len(self.recipe_calls) == 1:
            self.first_recipe_started.set()
            await self.release_first_recipe.wait()
        return result

    async def generate_recipe_image(self, recipe_name: str, description: str):
        self.image_calls.append((recipe_name, description))
        return self._next(self.image_results, self.image_calls)

    async def suggest_ingredients(self, ingredients: str):
        self.suggestion_calls.append(ingredients)
        result = self._next(self.suggestion_results, self.suggestion_calls)
        if self.release_first_suggestion is not None and len(self.suggestion_calls) == 1:
            self.first_suggestion_started.set()
            await self.release_first_suggestion.wait()
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def recipe_json() -> str:
    return json.dumps(RECIPE_PAYLOAD)


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    return FakeGenerationClient()
