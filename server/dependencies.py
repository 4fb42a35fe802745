"""FastAPI dependencies wiring settings, library and providers"""

from functools import lru_cache

from fastapi import Depends

from core.assembler import ReelAssembler
from core.config import Settings, get_settings
from core.library import ReelLibrary
from core.producer import ReelProducer
from core.providers import (
    ElevenLabsProvider,
    GeminiImageProvider,
    GeminiTextProvider,
    ProviderConfig,
)
from core.script_writer import ScriptWriter


def get_library(settings: Settings = Depends(get_settings)) -> ReelLibrary:
    return ReelLibrary(settings)


def get_script_writer(settings: Settings = Depends(get_settings)) -> ScriptWriter:
    provider = GeminiTextProvider(ProviderConfig(
        api_key=settings.gemini_api_key,
        model=settings.text_model,
    ))
    return ScriptWriter(provider)


@lru_cache
def _assembler() -> ReelAssembler:
    # The assembler holds no per-request state
    return ReelAssembler()


def get_producer(
    settings: Settings = Depends(get_settings),
    library: ReelLibrary = Depends(get_library),
    script_writer: ScriptWriter = Depends(get_script_writer),
) -> ReelProducer:
    return ReelProducer(
        library=library,
        script_writer=script_writer,
        image_provider=GeminiImageProvider(ProviderConfig(
            api_key=settings.gemini_api_key,
            model=settings.image_model,
            timeout=120,
        )),
        audio_provider=ElevenLabsProvider(ProviderConfig(api_key=settings.elevenlabs_api_key)),
        assembler=_assembler(),
        show_credits=settings.show_credits_image,
    )
