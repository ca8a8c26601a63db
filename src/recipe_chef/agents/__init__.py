from .recipe_agent import RecipeAgent
from .image_agent import ImageAgent
from .suggestion_agent import SuggestionAgent, parse_suggestions
from .generation_client import GenerationClient
from .llm_factory import build_chat_model
__all__ = ["RecipeAgent", "ImageAgent", "SuggestionAgent", "parse_suggestions", "GenerationClient", "build_chat_model"]
