"""
Audio duration helpers.

Narration length drives the whole reel timeline, so it is probed from the
file itself rather than trusted from the TTS provider.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import mutagen

logger = logging.getLogger(__name__)


async def get_audio_duration(audio_path: Union[str, Path], renderer=None) -> Optional[float]:
    """
    Get duration of an audio file in seconds.

    Tries mutagen first (fast, pure-Python), falls back to ffprobe.
    Returns None if neither works.
    """
    try:
        audio_info = mutagen.File(str(audio_path))
        if audio_info is not None and audio_info.info.length > 0:
            return float(audio_info.info.length)
    except (OSError, mutagen.MutagenError) as e:
        logger.debug(f"mutagen could not read {audio_path}: {e}")

    if renderer is None:
        from core.renderer import FFmpegRenderer
        renderer = FFmpegRenderer()
    return await renderer.get_duration(str(audio_path))
