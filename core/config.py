"""Application settings loaded from the environment using pydantic-settings"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Keys (loaded from .env or environment)
    gemini_api_key: str = ""
    elevenlabs_api_key: str = ""

    # Models
    text_model: str = "gemini-1.5-flash"
    image_model: str = "gemini-2.5-flash-image-preview"

    # Reel options
    show_credits_image: bool = False

    # Storage, relative paths resolve against base_dir
    base_dir: str = "."
    output_dir: str = "outputs"
    assets_dir: str = "assets"
    templates_dir: str = "templates"
    music_dir: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        return path if path.is_absolute() else Path(self.base_dir) / path

    @property
    def output_path(self) -> Path:
        return self._resolve(self.output_dir)

    @property
    def assets_path(self) -> Path:
        return self._resolve(self.assets_dir)

    @property
    def templates_path(self) -> Path:
        return self._resolve(self.templates_dir)

    @property
    def music_path(self) -> Path:
        if self.music_dir:
            return self._resolve(self.music_dir)
        return self.assets_path / "music"

    @property
    def credits_image_path(self) -> Path:
        return self.assets_path / "credits.png"


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings instance"""
    return Settings()
