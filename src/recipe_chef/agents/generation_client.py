"""
Facade over the three generation agents.

Each operation is a single round trip to the provider. Typed errors raised by
the agents are returned as ``Err`` values, so callers branch on the result
instead of catching exceptions. Agents are injected, or built lazily from
``Settings`` on first use so that a missing API key only surfaces when a
call is actually made.
"""

import logging
from typing import Optional

from recipe_chef.agents.image_agent import ImageAgent
from recipe_chef.agents.llm_factory import build_chat_model
from recipe_chef.agents.recipe_agent import RECIPE_FAILURE_MESSAGE, RecipeAgent
from recipe_chef.agents.suggestion_agent import SUGGESTION_FAILURE_MESSAGE, SuggestionAgent
from recipe_chef.config import Settings
from recipe_chef.schema import Err, GenerationError, Ok, ProviderError, Result

logger = logging.getLogger(__name__)


def _unavailable(exc: ProviderError, message: str) -> Err:
    # Configuration details stay in the log and in ErrorInfo.detail
    return Err(error=exc.to_info().model_copy(update={"message": message}))


class GenerationClient:
    def __init__(
        self,
        recipe_agent: Optional[RecipeAgent] = None,
        image_agent: Optional[ImageAgent] = None,
        suggestion_agent: Optional[SuggestionAgent] = None,
        settings: Optional[Settings] = None,
    ):
        self.recipe_agent = recipe_agent
        self.image_agent = image_agent
        self.suggestion_agent = suggestion_agent
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationClient":
        if not settings.google_api_key:
            logger.warning("GOOGLE_API_KEY is not set; generation requests will fail")
        return cls(settings=settings)

    def _settings(self) -> Settings:
        if self.settings is None:
            self.settings = Settings.from_env()
        return self.settings

    def _recipe(self) -> RecipeAgent:
        if self.recipe_agent is None:
            settings = self._settings()
            llm = build_chat_model(settings, temperature=settings.recipe_temperature, json_mode=True)
            self.recipe_agent = RecipeAgent(llm)
        return self.recipe_agent

    def _image(self) -> ImageAgent:
        if self.image_agent is None:
            settings = self._settings()
            self.image_agent = ImageAgent(
                api_key=settings.google_api_key,
                model=settings.image_model,
                base_url=settings.gemini_base_url,
                timeout=settings.request_timeout,
            )
        return self.image_agent

    def _suggestions(self) -> SuggestionAgent:
        if self.suggestion_agent is None:
            self.suggestion_agent = SuggestionAgent(build_chat_model(self._settings()))
        return self.suggestion_agent

    async def generate_recipe(self, ingredients: str) -> Result:
        try:
            agent = self._recipe()
        except ProviderError as exc:
            return _unavailable(exc, RECIPE_FAILURE_MESSAGE)
        try:
            recipe = await agent.ainvoke(ingredients)
        except GenerationError as exc:
            return Err(error=exc.to_info())
        return Ok(value=recipe)

    async def generate_recipe_image(self, recipe_name: str, description: str) -> Result:
        try:
            image_url = await self._image().ainvoke(recipe_name, description)
        except GenerationError as exc:
            return Err(error=exc.to_info())
        return Ok(value=image_url)

    async def suggest_ingredients(self, ingredients: str) -> Result:
        try:
            agent = self._suggestions()
        except ProviderError as exc:
            return _unavailable(exc, SUGGESTION_FAILURE_MESSAGE)
        try:
            suggestions = await agent.ainvoke(ingredients)
        except GenerationError as exc:
            return Err(error=exc.to_info())
        return Ok(value=suggestions)
