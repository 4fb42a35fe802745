"""
ElevenLabs Text-to-Speech Provider Implementation

Synthesizes the full reel narration in one request.

API Documentation: https://api.elevenlabs.io/docs
"""

import logging
from typing import Dict, Optional

import aiohttp

from .base import AudioGenerationResult, AudioProvider, ProviderConfig, ProviderError

logger = logging.getLogger(__name__)


class ElevenLabsProvider(AudioProvider):
    """
    ElevenLabs text-to-speech provider implementation.
    """

    def __init__(self, config: Optional[ProviderConfig] = None, model: str = "eleven_monolingual_v1"):
        """
        Initialize ElevenLabs provider.

        Args:
            config: Provider configuration carrying the API key
            model: Model ID to use (default: eleven_monolingual_v1)
        """
        config = config or ProviderConfig()
        if not config.base_url:
            config.base_url = "https://api.elevenlabs.io"
        super().__init__(config)
        self.model = config.model or model

    @property
    def name(self) -> str:
        """Return provider name."""
        return "elevenlabs"

    def _get_headers(self) -> Dict[str, str]:
        return {
            "xi-api-key": self.config.api_key,
            "Content-Type": "application/json"
        }

    async def generate_speech(
        self,
        text: str,
        voice_id: str,
        output_format: str = "mp3_44100_128",
        **kwargs
    ) -> AudioGenerationResult:
        """
        Generate speech audio from text.

        Args:
            text: Text to convert to speech
            voice_id: ElevenLabs voice ID
            output_format: Audio output format (default: mp3_44100_128)

        Returns:
            AudioGenerationResult containing audio data

        Raises:
            ProviderError: If the API key is missing or the request fails
        """
        if not self.config.api_key:
            raise ProviderError("ElevenLabs API key is required. Set ELEVENLABS_API_KEY environment variable.")
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        url = f"{self.config.base_url}/v1/text-to-speech/{voice_id}?output_format={output_format}"
        request_body = {"text": text, "model_id": self.model}

        async with aiohttp.ClientSession() as session:
            async with session.post(
                url,
                json=request_body,
                headers=self._get_headers(),
                timeout=aiohttp.ClientTimeout(total=self.config.timeout)
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise ProviderError(
                        f"ElevenLabs API error (status {response.status}): {error_text}",
                        status=response.status,
                    )
                audio_data = await response.read()

        logger.info(f"Narration synthesized ({len(text)} characters)")
        return AudioGenerationResult(
            success=True,
            audio_data=audio_data,
            format="mp3",
            provider_metadata={
                "provider": self.name,
                "voice_id": voice_id,
                "model": self.model,
                "character_count": len(text),
            },
        )
