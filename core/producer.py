"""
Reel producer - end-to-end pipeline from an approved script to a video.

Narration and scene images are generated first, then handed to the
ReelAssembler in scene order.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from core.assembler import ReelAssembler
from core.library import VIDEO_FILENAME, ReelLibrary
from core.models.render import CompositionRequest, CompositionResult
from core.models.script import ReelMetadata, Scene, Script
from core.providers.base import AudioProvider, ImageProvider, ProviderError
from core.script_writer import ScriptWriter, add_overlay_instruction, add_pillarbox_instruction

logger = logging.getLogger(__name__)


class ReelProductionError(RuntimeError):
    """Raised when the assembly step of a production fails."""

    def __init__(self, result: CompositionResult):
        super().__init__(f"Reel assembly failed ({result.error_kind}): {result.error_message}")
        self.result = result


@dataclass
class ProducedReel:
    """A finished reel on disk"""
    reel_id: str
    video_path: Path
    metadata_path: Path
    result: CompositionResult

    @property
    def video_url(self) -> str:
        return f"/outputs/{self.reel_id}/{VIDEO_FILENAME}"


def is_silent_voice(voice_id: Optional[str]) -> bool:
    return not voice_id or voice_id == "none"


class ReelProducer:
    """
    Produces a reel from a script.

    Steps:
    1. Synthesize the joined narration (unless silent)
    2. Generate one image per scene concurrently
    3. Assemble the reel with optional music and credits
    4. Write the prompt.json sidecar
    """

    def __init__(
        self,
        library: ReelLibrary,
        script_writer: ScriptWriter,
        image_provider: ImageProvider,
        audio_provider: AudioProvider,
        assembler: Optional[ReelAssembler] = None,
        show_credits: bool = False,
    ):
        self.library = library
        self.script_writer = script_writer
        self.image_provider = image_provider
        self.audio_provider = audio_provider
        self.assembler = assembler or ReelAssembler()
        self.show_credits = show_credits

    def new_reel_id(self) -> int:
        return int(time.time() * 1000)

    async def narrate(self, script: Script, output_path: Path, voice_id: str) -> Path:
        result = await self.audio_provider.generate_speech(text=script.full_narration, voice_id=voice_id)
        if not result.success or not result.audio_data:
            raise ProviderError(result.error_message or "Narration synthesis returned no audio")
        output_path.write_bytes(result.audio_data)
        logger.info(f"Narration saved to {output_path}")
        return output_path

    async def render_scene_image(self, scene: Scene, output_path: Path, overlay_text: bool) -> Path:
        prompt = add_pillarbox_instruction(scene.visual_prompt)
        if overlay_text:
            keywords = await self.script_writer.extract_keywords(scene.narration)
            if keywords:
                prompt = add_overlay_instruction(prompt, keywords)
        await self.image_provider.generate_image(prompt, str(output_path))
        return output_path

    async def render_images(self, script: Script, reel_dir: Path, overlay_text: bool) -> List[Path]:
        # gather returns results in scene order regardless of completion order
        return await asyncio.gather(*[
            self.render_scene_image(scene, reel_dir / f"image_{i}.png", overlay_text)
            for i, scene in enumerate(script.scenes)
        ])

    async def create_reel(
        self,
        script: Script,
        music_file: Optional[str] = None,
        overlay_text: bool = False,
        voice_id: Optional[str] = None,
        original_text: Optional[str] = None,
        template_id: Optional[str] = None,
    ) -> ProducedReel:
        """
        Produce a reel and its sidecar.

        Raises:
            ProviderError: If narration or image generation fails
            ReelProductionError: If the assembly fails
        """
        reel_id, reel_dir = self.library.allocate_reel_dir(self.new_reel_id())
        logger.info(f"Producing reel {reel_id} with {len(script.scenes)} scenes")

        narration_path = None
        if not is_silent_voice(voice_id):
            narration_path = await self.narrate(script, reel_dir / "audio.mp3", voice_id)

        image_paths = await self.render_images(script, reel_dir, overlay_text)

        music_path = None
        if music_file:
            try:
                music_path = self.library.music_file(music_file)
            except FileNotFoundError:
                logger.warning(f"Music file {music_file} not found, continuing without music")

        video_path = reel_dir / VIDEO_FILENAME
        request = CompositionRequest.from_paths(
            image_paths=[str(p) for p in image_paths],
            output_path=str(video_path),
            narration_path=str(narration_path) if narration_path else None,
            music_path=str(music_path) if music_path else None,
            silent=is_silent_voice(voice_id),
            credits_image=str(self.library.settings.credits_image_path),
            credits_enabled=self.show_credits,
        )
        result = await self.assembler.assemble(request)
        if not result.success:
            raise ReelProductionError(result)

        metadata_path = self.library.write_metadata(reel_id, ReelMetadata(
            original_text=original_text,
            template_id=template_id,
            voice_id=voice_id,
            music_file=music_file,
            overlay_text=bool(overlay_text),
            final_script=script.to_dict(),
        ))

        return ProducedReel(
            reel_id=reel_id,
            video_path=video_path,
            metadata_path=metadata_path,
            result=result,
        )
