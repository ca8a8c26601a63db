"""
Configuration for Recipe Chef.

Settings are read from the process environment once at startup. A ``.env`` file
is loaded first with python-dotenv; variables already present in the
environment take precedence over the file.

Environment Variables:
- GOOGLE_API_KEY: Gemini API key (``API_KEY`` is accepted as a fallback)
- GROQ_API_KEY: only needed when RECIPE_CHEF_TEXT_PROVIDER=groq
- RECIPE_CHEF_TEXT_PROVIDER: "google" (default) or "groq"
- RECIPE_CHEF_TEXT_MODEL: chat model used for recipes and suggestions
- RECIPE_CHEF_IMAGE_MODEL: Gemini model used for the recipe illustration
- RECIPE_CHEF_TEMPERATURE: sampling temperature of the recipe call
- RECIPE_CHEF_TIMEOUT: image request timeout in seconds
- RECIPE_CHEF_GEMINI_URL: base URL of the Gemini REST API
- RECIPE_CHEF_LOG_LEVEL: logging level name (default INFO)

A missing API key is not an error here. Generation calls fail on first use
instead, so the form can still be rendered.
"""

import logging
import os
from typing import Literal, Optional, Union
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_TEXT_MODELS = {
    "google": "gemini-2.5-flash",
    "groq": "llama3-8b-8192",
}
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseModel):
    google_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None
    text_provider: Literal["google", "groq"] = "google"
    text_model: str = DEFAULT_TEXT_MODELS["google"]
    image_model: str = DEFAULT_IMAGE_MODEL
    recipe_temperature: float = 0.7
    request_timeout: float = 60.0
    gemini_base_url: str = DEFAULT_GEMINI_URL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "Settings":
        load_dotenv(env_file, override=False)

        provider = os.getenv("RECIPE_CHEF_TEXT_PROVIDER", "google").strip().lower()
        return cls(
            google_api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY") or None,
            groq_api_key=os.getenv("GROQ_API_KEY") or None,
            text_provider=provider,
            text_model=os.getenv("RECIPE_CHEF_TEXT_MODEL") or DEFAULT_TEXT_MODELS.get(provider, DEFAULT_TEXT_MODELS["google"]),
            image_model=os.getenv("RECIPE_CHEF_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
            recipe_temperature=float(os.getenv("RECIPE_CHEF_TEMPERATURE", "0.7")),
            request_timeout=float(os.getenv("RECIPE_CHEF_TIMEOUT", "60")),
            gemini_base_url=(os.getenv("RECIPE_CHEF_GEMINI_URL") or DEFAULT_GEMINI_URL).rstrip("/"),
            log_level=os.getenv("RECIPE_CHEF_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
