"""
Duration resolution for reels.

Turns a CompositionRequest into concrete timing: how long the narrated part
runs, whether a credits tail is appended, and how long each scene image stays
on screen.
"""

import logging
import os
from typing import Awaitable, Callable, Optional

from core.errors import ConfigInconsistent, DurationProbeFailed, InvalidSegmentCount
from core.models.render import (
    CompositionRequest,
    CreditsSegment,
    RenderConfig,
    Segment,
    Timeline,
    Timing,
    VisualAsset,
)

logger = logging.getLogger(__name__)

DurationProbe = Callable[[str], Awaitable[Optional[float]]]


def credits_present(request: CompositionRequest) -> bool:
    """Credits are shown only when enabled and the image exists on disk."""
    return bool(
        request.credits_enabled
        and request.credits_image
        and os.path.exists(request.credits_image)
    )


async def probe_narration(request: CompositionRequest, probe: DurationProbe) -> float:
    path = request.narration.path
    try:
        duration = await probe(path)
    except (OSError, ValueError, RuntimeError) as e:
        raise DurationProbeFailed(f"Could not probe narration {path}: {e}") from e

    if duration is None or duration <= 0:
        raise DurationProbeFailed(f"Could not determine duration of narration {path}")
    return float(duration)


async def resolve_durations(
    request: CompositionRequest,
    probe: DurationProbe,
    config: Optional[RenderConfig] = None,
) -> Timing:
    """
    Resolve all durations for a request.

    Args:
        request: The composition request
        probe: Async callable returning the duration of a media file
        config: Render configuration (uses defaults if not provided)

    Returns:
        Timing for the reel

    Raises:
        InvalidSegmentCount: If the request has no images
        DurationProbeFailed: If the narration cannot be probed
        ConfigInconsistent: If the transition is not shorter than a segment
    """
    config = config or RenderConfig()
    count = request.segment_count
    if count == 0:
        raise InvalidSegmentCount("A reel needs at least one scene image")

    if request.uses_narration:
        narration_duration = await probe_narration(request, probe)
    else:
        narration_duration = count * config.silent_segment_duration

    credits_duration = config.credits_duration if credits_present(request) else 0.0
    segment_duration = narration_duration / count
    transition = config.transition_duration

    if transition >= segment_duration:
        raise ConfigInconsistent(
            f"Transition of {transition}s does not fit in {segment_duration:.3f}s segments "
            f"({count} scenes over {narration_duration:.3f}s)"
        )

    timing = Timing(
        narration_duration=narration_duration,
        credits_duration=credits_duration,
        total_duration=narration_duration + credits_duration,
        segment_duration=segment_duration,
        segment_count=count,
        transition_duration=transition,
    )
    logger.debug(f"Resolved timing: {timing}")
    return timing


def build_timeline(request: CompositionRequest, timing: Timing) -> Timeline:
    """Lay the scene images out on a timeline using resolved timing."""
    segments = [
        Segment(asset=image, duration=timing.segment_duration)
        for image in request.images
    ]
    credits = None
    if timing.credits_duration > 0:
        credits = CreditsSegment(
            asset=VisualAsset(path=request.credits_image, ordinal=len(segments)),
            duration=timing.credits_duration,
        )
    return Timeline(
        segments=segments,
        credits=credits,
        transition_duration=timing.transition_duration,
    )
