import base64
import logging
from typing import Any, Dict, Optional

import httpx

from recipe_chef.config import DEFAULT_GEMINI_URL, DEFAULT_IMAGE_MODEL
from recipe_chef.schema import ParseError, ProviderError

logger = logging.getLogger(__name__)

IMAGE_FAILURE_MESSAGE = "Failed to generate an image for the recipe."


def build_image_prompt(recipe_name: str, description: str) -> str:
    return (
        f'A delicious, professionally photographed image of "{recipe_name}". {description}. '
        "The food should look appetizing and be presented on a clean, modern plate "
        "with a blurred background."
    )


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def extract_image_data_uri(data: Any) -> str:
    """Return the first inline image of the first candidate as a base64 data URI.

    Anything that is not shaped like a Gemini response counts as "no image".
    """
    candidates = _as_list(_as_dict(data).get("candidates"))
    first = _as_dict(candidates[0]) if candidates else {}
    parts = _as_list(_as_dict(first.get("content")).get("parts"))

    for part in parts:
        part = _as_dict(part)
        inline = _as_dict(part.get("inlineData") or part.get("inline_data"))
        if inline.get("data"):
            mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
            return f"data:{mime_type};base64,{inline['data']}"

    raise ParseError(
        IMAGE_FAILURE_MESSAGE,
        detail="No image data found in the response.",
        operation="generate_recipe_image",
        parts=len(parts),
    )


def decode_data_uri(data_uri: str) -> bytes:
    _, _, encoded = data_uri.partition(";base64,")
    return base64.b64decode(encoded)


class ImageAgent:
    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_IMAGE_MODEL,
        base_url: str = DEFAULT_GEMINI_URL,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.endpoint = f"{base_url.rstrip('/')}/models/{model}:generateContent"
        self.timeout = timeout
        # httpx.MockTransport implements both the sync and async interfaces
        self.transport = transport

    def _payload(self, recipe_name: str, description: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": build_image_prompt(recipe_name, description)}]}],
            "generationConfig": {"responseModalities": ["IMAGE"]},
        }

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            logger.error("Cannot generate a recipe image: GOOGLE_API_KEY is not set")
            raise ProviderError(
                IMAGE_FAILURE_MESSAGE,
                detail="GOOGLE_API_KEY is not set.",
                operation="generate_recipe_image",
            )
        return {"x-goog-api-key": self.api_key}

    def invoke(self, recipe_name: str, description: str) -> str:
        headers = self._headers()
        try:
            with httpx.Client(transport=self.transport, timeout=self.timeout) as client:
                response = client.post(self.endpoint, headers=headers, json=self._payload(recipe_name, description))
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise self._provider_error(exc) from exc
        except ValueError as exc:
            raise self._parse_error(exc) from exc
        return extract_image_data_uri(data)

    async def ainvoke(self, recipe_name: str, description: str) -> str:
        headers = self._headers()
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.post(self.endpoint, headers=headers, json=self._payload(recipe_name, description))
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise self._provider_error(exc) from exc
        except ValueError as exc:
            raise self._parse_error(exc) from exc
        return extract_image_data_uri(data)

    def _provider_error(self, exc: httpx.HTTPError) -> ProviderError:
        logger.error("Error generating recipe image with %s: %r", self.model, exc)
        status = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
        return ProviderError(
            IMAGE_FAILURE_MESSAGE,
            detail=repr(exc),
            operation="generate_recipe_image",
            model=self.model,
            status_code=status,
        )

    def _parse_error(self, exc: ValueError) -> ParseError:
        logger.error("Image response from %s was not valid JSON: %s", self.model, exc)
        return ParseError(IMAGE_FAILURE_MESSAGE, detail=str(exc), operation="generate_recipe_image", model=self.model)
