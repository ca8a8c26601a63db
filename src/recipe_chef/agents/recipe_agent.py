import logging

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import PromptTemplate

from recipe_chef.schema import ParseError, ProviderError, Recipe

logger = logging.getLogger(__name__)

RECIPE_FAILURE_MESSAGE = (
    "Failed to communicate with the recipe AI. Please check your connection and try again."
)


class RecipeAgent:
    def __init__(self, llm: BaseChatModel):
        self.llm = llm
        self.parser = PydanticOutputParser(pydantic_object=Recipe)

        raw_prompt = PromptTemplate.from_template(
            "You are a creative and experienced chef. Your task is to generate a delicious recipe "
            "based *only* on the ingredients provided by the user.\n"
            "If the ingredients are not sufficient to create a meaningful recipe, your description "
            "should politely state that and suggest adding more items.\n"
            "Return ONLY valid JSON in the format described.\n\n"
            "{format_instructions}\n\n"
            "User's ingredients: {ingredients}"
        )
        # The Recipe field descriptions end up in the JSON schema the model is asked to follow
        self.prompt = raw_prompt.partial(
            format_instructions=self.parser.get_format_instructions()
        )

        self.chain = self.prompt | self.llm | self.parser

    def invoke(self, ingredients: str) -> Recipe:
        try:
            return self.chain.invoke({"ingredients": ingredients})
        except Exception as exc:
            raise self._wrap(exc) from exc

    async def ainvoke(self, ingredients: str) -> Recipe:
        try:
            return await self.chain.ainvoke({"ingredients": ingredients})
        except Exception as exc:
            raise self._wrap(exc) from exc

    def _wrap(self, exc: Exception):
        if isinstance(exc, OutputParserException):
            logger.error("Recipe response could not be parsed: %s", exc)
            return ParseError(RECIPE_FAILURE_MESSAGE, detail=str(exc), operation="generate_recipe")
        logger.error("Error generating recipe: %r", exc)
        return ProviderError(RECIPE_FAILURE_MESSAGE, detail=repr(exc), operation="generate_recipe")
