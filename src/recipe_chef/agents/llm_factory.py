import logging
from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_groq import ChatGroq

from recipe_chef.config import Settings
from recipe_chef.schema import ProviderError

logger = logging.getLogger(__name__)

PROVIDER_NOT_CONFIGURED = "The text generation provider is not configured."


def build_chat_model(
    settings: Settings,
    temperature: Optional[float] = None,
    json_mode: bool = False,
) -> BaseChatModel:
    """Create the configured chat model, or raise ProviderError if its key is missing."""
    kwargs = {}
    if temperature is not None:
        kwargs["temperature"] = temperature

    if settings.text_provider == "groq":
        if not settings.groq_api_key:
            logger.error("Cannot build the groq chat model: GROQ_API_KEY is not set")
            raise ProviderError(PROVIDER_NOT_CONFIGURED, detail="GROQ_API_KEY is not set.", provider="groq")
        return ChatGroq(api_key=settings.groq_api_key, model=settings.text_model, **kwargs)

    if not settings.google_api_key:
        logger.error("Cannot build the google chat model: GOOGLE_API_KEY is not set")
        raise ProviderError(PROVIDER_NOT_CONFIGURED, detail="GOOGLE_API_KEY is not set.", provider="google")
    if json_mode:
        kwargs["response_mime_type"] = "application/json"
    return ChatGoogleGenerativeAI(
        model=settings.text_model,
        google_api_key=settings.google_api_key,
        **kwargs,
    )
