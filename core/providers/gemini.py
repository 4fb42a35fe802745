"""
Google Gemini Provider Implementation

Text generation for script writing and image generation for scene stills,
both through the generateContent REST endpoint.

API Docs: https://ai.google.dev/api/generate-content
"""

import base64
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiohttp

from .base import (
    ImageGenerationResult,
    ImageProvider,
    ProviderConfig,
    ProviderError,
    TextProvider,
)

logger = logging.getLogger(__name__)

API_BASE = "https://generativelanguage.googleapis.com/v1beta"
RETRY_INFO_TYPE = "type.googleapis.com/google.rpc.RetryInfo"


def _retry_delay(error_body: Dict[str, Any]) -> Optional[str]:
    """Pull the RetryInfo delay out of a Google API error body."""
    details = (error_body.get("error") or {}).get("details") or []
    for detail in details:
        if detail.get("@type") == RETRY_INFO_TYPE and detail.get("retryDelay"):
            return detail["retryDelay"]
    return None


async def generate_content(config: ProviderConfig, model: str, prompt: str) -> List[Dict[str, Any]]:
    """
    Call generateContent and return the parts of the first candidate.

    Raises:
        ProviderError: On a missing key, HTTP error, or empty response
    """
    if not config.api_key:
        raise ProviderError("Gemini API key is required. Set GEMINI_API_KEY environment variable.")

    url = f"{config.base_url or API_BASE}/models/{model}:generateContent"
    body = {"contents": [{"parts": [{"text": prompt}]}]}

    timeout = aiohttp.ClientTimeout(total=config.timeout)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.post(
            url,
            json=body,
            headers={"x-goog-api-key": config.api_key, "Content-Type": "application/json"},
        ) as response:
            if response.status != 200:
                try:
                    error_body = await response.json(content_type=None)
                except ValueError:
                    error_body = {}
                message = (error_body.get("error") or {}).get("message") or await response.text()
                raise ProviderError(
                    f"Gemini API error (status {response.status}): {message}",
                    status=response.status,
                    retry_delay=_retry_delay(error_body),
                )
            data = await response.json()

    candidates = data.get("candidates") or []
    if not candidates:
        raise ProviderError("Gemini returned no candidates")
    return (candidates[0].get("content") or {}).get("parts") or []


class GeminiTextProvider(TextProvider):
    """Gemini text model used for scripts, keywords and rewrites"""

    def __init__(self, config: Optional[ProviderConfig] = None, model: str = "gemini-1.5-flash"):
        super().__init__(config or ProviderConfig())
        self.model = self.config.model or model

    @property
    def name(self) -> str:
        return "gemini"

    async def generate_text(self, prompt: str) -> str:
        parts = await generate_content(self.config, self.model, prompt)
        return "".join(p.get("text", "") for p in parts).strip()


class GeminiImageProvider(ImageProvider):
    """Gemini image model; images come back as inline base64 data"""

    def __init__(self, config: Optional[ProviderConfig] = None, model: str = "gemini-2.5-flash-image-preview"):
        super().__init__(config or ProviderConfig(timeout=120))
        self.model = self.config.model or model

    @property
    def name(self) -> str:
        return "gemini-image"

    async def generate_image(self, prompt: str, output_path: str, **kwargs) -> ImageGenerationResult:
        parts = await generate_content(self.config, self.model, prompt)
        image_part = next((p for p in parts if p.get("inlineData")), None)
        if image_part is None:
            raise ProviderError("No image data found in Gemini response.")

        inline = image_part["inlineData"]
        Path(output_path).write_bytes(base64.b64decode(inline["data"]))
        logger.info(f"Image saved to {output_path}")

        return ImageGenerationResult(
            success=True,
            image_path=str(output_path),
            mime_type=inline.get("mimeType"),
            provider_metadata={"provider": self.name, "model": self.model},
        )
