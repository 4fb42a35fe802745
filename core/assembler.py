"""
Reel assembler - single entry point for turning assets into a video.

Sequences duration resolution, input slot assignment, visual and audio graph
construction, program emission and the ffmpeg encode.
"""

import logging
import os
import shlex
import time
from typing import Optional

from core.assembly import (
    InputSlots,
    build_audio_bus,
    build_timeline,
    build_visual_chain,
    credits_present,
    emit_program,
    resolve_durations,
)
from core.audio_utils import get_audio_duration
from core.errors import AssetMissing, CompositionError
from core.models.render import (
    CompositionPlan,
    CompositionRequest,
    CompositionResult,
    RenderConfig,
)
from core.renderer import FFmpegRenderer

logger = logging.getLogger(__name__)


class ReelAssembler:
    """
    Assembles scene images, narration and music into a vertical reel.

    Each call owns its plan; nothing is shared between concurrent calls
    apart from the (stateless) renderer.
    """

    def __init__(
        self,
        renderer: Optional[FFmpegRenderer] = None,
        config: Optional[RenderConfig] = None,
    ):
        self.config = config or (renderer.config if renderer else RenderConfig())
        self.renderer = renderer or FFmpegRenderer(config=self.config)

    async def _probe(self, path: str) -> Optional[float]:
        return await get_audio_duration(path, renderer=self.renderer)

    def check_assets(self, request: CompositionRequest) -> None:
        """
        Ensure every input the reel will use exists.

        Raises:
            AssetMissing: For the first missing path
        """
        paths = [image.path for image in request.images]
        if request.uses_narration:
            paths.append(request.narration.path)
        if request.music is not None:
            paths.append(request.music.path)
        for path in paths:
            if not os.path.exists(path):
                raise AssetMissing(path)

    async def plan(self, request: CompositionRequest) -> CompositionPlan:
        """
        Resolve a request into a composition plan without encoding.

        Raises:
            CompositionError: Any of the assembly error kinds
        """
        timing = await resolve_durations(request, self._probe, self.config)
        slots = InputSlots.from_request(request, include_credits=credits_present(request))

        visual = build_visual_chain(slots, timing, self.config)
        audio = build_audio_bus(slots, timing, self.config)
        program = emit_program(visual, audio)

        logger.debug(f"Slots: {slots!r}; audio case: {audio.case.value}")
        return CompositionPlan(
            timing=timing,
            slots=slots,
            program=program.text,
            video_label=program.video_label,
            audio_label=program.audio_label,
            video_inputs=slots.video_paths,
            audio_inputs=slots.audio_paths,
            crossfade_offsets=tuple(visual.offsets),
            timeline=build_timeline(request, timing),
        )

    async def assemble(self, request: CompositionRequest) -> CompositionResult:
        """
        Assemble a reel.

        Args:
            request: Images, optional narration and music, and flags

        Returns:
            CompositionResult with the output path, or the error kind and
            diagnostic when any step failed
        """
        start_time = time.time()
        command = None

        try:
            self.check_assets(request)
            plan = await self.plan(request)
            command = shlex.join(self.renderer.build_command(plan, request.output_path))
            output_path = await self.renderer.encode(plan, request.output_path)
        except CompositionError as e:
            message = e.message
            diagnostics = getattr(e, "diagnostics", "")
            if diagnostics:
                message = f"{message}\n{diagnostics}"
            logger.error(f"Reel assembly failed ({e.kind}): {e.message}")
            return CompositionResult(
                success=False,
                error_kind=e.kind,
                error_message=message,
                render_time=time.time() - start_time,
                ffmpeg_command=command,
            )

        logger.info(f"Reel assembled at {output_path}")
        return CompositionResult(
            success=True,
            output_path=output_path,
            duration=plan.timing.total_duration,
            render_time=time.time() - start_time,
            ffmpeg_command=command,
        )
