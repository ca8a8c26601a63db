import logging
from typing import List

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate

from recipe_chef.schema import ProviderError

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5
SUGGESTION_FAILURE_MESSAGE = "Failed to get ingredient suggestions."


def parse_suggestions(text: str) -> List[str]:
    # "olive oil, salt,  pepper ," -> ["olive oil", "salt", "pepper"]
    text = text.strip()
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


class SuggestionAgent:
    def __init__(self, llm: BaseChatModel):
        self.llm = llm
        self.prompt = PromptTemplate.from_template(
            "You are an expert chef's assistant. Based on the user's list of ingredients: "
            "\"{ingredients}\", suggest up to {limit} common ingredients that would complement "
            "them well. Return *only* a comma-separated list of the suggested ingredients. "
            "Do not include any introductory text, explanations, or numbering. "
            "For example: olive oil, salt, black pepper, onion, garlic"
        ).partial(limit=str(MAX_SUGGESTIONS))
        self.chain = self.prompt | self.llm | StrOutputParser()

    def invoke(self, ingredients: str) -> List[str]:
        try:
            text = self.chain.invoke({"ingredients": ingredients})
        except Exception as exc:
            logger.error("Error suggesting ingredients: %r", exc)
            raise ProviderError(SUGGESTION_FAILURE_MESSAGE, detail=repr(exc), operation="suggest_ingredients") from exc
        return parse_suggestions(text)

    async def ainvoke(self, ingredients: str) -> List[str]:
        try:
            text = await self.chain.ainvoke({"ingredients": ingredients})
        except Exception as exc:
            logger.error("Error suggesting ingredients: %r", exc)
            raise ProviderError(SUGGESTION_FAILURE_MESSAGE, detail=repr(exc), operation="suggest_ingredients") from exc
        return parse_suggestions(text)
