"""Generative service providers (script text, scene images, narration)"""

from .base import (
    ProviderError,
    ProviderConfig,
    AudioGenerationResult,
    ImageGenerationResult,
    TextProvider,
    AudioProvider,
    ImageProvider,
)
from .gemini import GeminiTextProvider, GeminiImageProvider
from .elevenlabs import ElevenLabsProvider

__all__ = [
    "ProviderError",
    "ProviderConfig",
    "AudioGenerationResult",
    "ImageGenerationResult",
    "TextProvider",
    "AudioProvider",
    "ImageProvider",
    "GeminiTextProvider",
    "GeminiImageProvider",
    "ElevenLabsProvider",
]
