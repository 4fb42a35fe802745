"""Abstract base classes for provider interfaces"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any


def _mask_secret(value: Optional[str]) -> str:
    """Mask a secret value for safe display in logs/repr."""
    if value is None:
        return "None"
    if len(value) <= 8:
        return "'***'"
    return f"'{value[:4]}...{value[-4:]}'"


class ProviderError(RuntimeError):
    """
    Raised when a provider API call fails.

    Attributes:
        status: HTTP status returned by the provider, if any
        retry_delay: Provider-suggested wait before retrying (e.g. "17s")
    """

    def __init__(self, message: str, status: Optional[int] = None, retry_delay: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.retry_delay = retry_delay

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429


@dataclass
class ProviderConfig:
    """Configuration shared by all providers"""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None
    timeout: int = 60  # seconds
    extra_params: Dict[str, Any] = None

    def __post_init__(self):
        if self.extra_params is None:
            self.extra_params = {}

    def __repr__(self) -> str:
        """Safe repr that masks API key to prevent accidental exposure in logs."""
        return (
            f"ProviderConfig(api_key={_mask_secret(self.api_key)}, "
            f"base_url={self.base_url!r}, model={self.model!r}, timeout={self.timeout})"
        )


@dataclass
class AudioGenerationResult:
    """Result from audio generation"""
    success: bool
    audio_path: Optional[str] = None
    audio_data: Optional[bytes] = None  # Raw audio bytes when not saving to file
    format: str = "mp3"
    error_message: Optional[str] = None
    provider_metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.provider_metadata is None:
            self.provider_metadata = {}


@dataclass
class ImageGenerationResult:
    """Result from image generation"""
    success: bool
    image_path: Optional[str] = None
    mime_type: Optional[str] = None
    error_message: Optional[str] = None
    provider_metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.provider_metadata is None:
            self.provider_metadata = {}


class TextProvider(ABC):
    """Generative text model used for script writing"""

    def __init__(self, config: ProviderConfig):
        self.config = config

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier"""
        pass

    @abstractmethod
    async def generate_text(self, prompt: str) -> str:
        """
        Generate text for a prompt.

        Raises:
            ProviderError: If the API call fails
        """
        pass


class AudioProvider(ABC):
    """
    Abstract base class for narration (TTS) providers.
    """

    def __init__(self, config: ProviderConfig):
        self.config = config

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier"""
        pass

    @abstractmethod
    async def generate_speech(self, text: str, voice_id: str, **kwargs) -> AudioGenerationResult:
        """
        Generate speech from text.

        Args:
            text: Text to convert to speech
            voice_id: Voice identifier (provider-specific)
            **kwargs: Provider-specific parameters

        Returns:
            AudioGenerationResult with raw audio bytes
        """
        pass


class ImageProvider(ABC):
    """
    Abstract base class for image generation providers.
    """

    def __init__(self, config: ProviderConfig):
        self.config = config

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier"""
        pass

    @abstractmethod
    async def generate_image(self, prompt: str, output_path: str, **kwargs) -> ImageGenerationResult:
        """
        Generate an image and save it to output_path.

        Raises:
            ProviderError: If the API call fails or returns no image
        """
        pass
