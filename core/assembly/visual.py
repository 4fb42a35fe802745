"""
Visual chain construction.

Each scene image is cropped to the vertical frame and scaled, then the images
are chained with xfade crossfades. An optional credits image fades in after
the narrated part ends.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from core.assembly.graph import (
    FilterNode,
    crossfade_node,
    normalize_node,
    passthrough_node,
)
from core.assembly.indexer import InputSlots
from core.errors import ConfigInconsistent
from core.models.render import RenderConfig, SlotRole, Timing


VIDEO_OUT = "v_out"
CREDITS_LABEL = "credits_v"


@dataclass
class VisualChain:
    """
    Nodes producing the final video stream.

    Attributes:
        normalize_nodes: Per-input crop/scale nodes
        transition_nodes: Crossfades plus the final credits fade or pass-through
        output_label: Label of the final video stream
        offsets: Crossfade offsets in seconds, in chain order
    """
    normalize_nodes: List[FilterNode] = field(default_factory=list)
    transition_nodes: List[FilterNode] = field(default_factory=list)
    output_label: str = VIDEO_OUT
    offsets: List[float] = field(default_factory=list)


def crossfade_offsets(timing: Timing) -> List[float]:
    """Offsets of the scene-to-scene crossfades (credits fade excluded)."""
    return [
        i * timing.segment_duration - timing.transition_duration
        for i in range(1, timing.segment_count)
    ]


def check_offsets(offsets: List[float], credits_offset: Optional[float] = None) -> None:
    """
    Reject offsets that would make xfade overlap or run backwards.

    Raises:
        ConfigInconsistent: If any offset is negative, scene offsets are not
            strictly increasing, or the credits fade starts before the last
            scene fade.
    """
    for offset in offsets:
        if offset < 0:
            raise ConfigInconsistent(f"Crossfade offset {offset:.3f}s is negative")
    for previous, current in zip(offsets, offsets[1:]):
        if current <= previous:
            raise ConfigInconsistent(
                f"Crossfade offsets are not increasing: {previous:.3f}s then {current:.3f}s"
            )
    if credits_offset is not None:
        if credits_offset < 0 or (offsets and credits_offset < offsets[-1]):
            raise ConfigInconsistent(
                f"Credits crossfade at {credits_offset:.3f}s precedes the scene crossfades"
            )


def build_visual_chain(
    slots: InputSlots,
    timing: Timing,
    config: Optional[RenderConfig] = None,
) -> VisualChain:
    """
    Build normalization and crossfade nodes for the reel.

    Args:
        slots: Input slot registry
        timing: Resolved timing
        config: Render configuration (uses defaults if not provided)

    Returns:
        VisualChain whose output label is the final video stream
    """
    config = config or RenderConfig()
    chain = VisualChain()
    transition = timing.transition_duration

    for ordinal in range(timing.segment_count):
        slot = slots.slot(SlotRole.IMAGE, ordinal)
        chain.normalize_nodes.append(
            normalize_node(slot, f"v{slot}", config.aspect_crop, config.scale)
        )

    offsets = crossfade_offsets(timing)
    credits_offset = None
    if slots.has(SlotRole.CREDITS):
        credits_offset = timing.narration_duration - transition
    check_offsets(offsets, credits_offset)

    running = f"v{slots.slot(SlotRole.IMAGE, 0)}"
    for ordinal, offset in enumerate(offsets, start=1):
        slot = slots.slot(SlotRole.IMAGE, ordinal)
        label = f"c{ordinal}"
        chain.transition_nodes.append(
            crossfade_node(running, f"v{slot}", transition, offset, label)
        )
        running = label

    if credits_offset is not None:
        chain.normalize_nodes.append(
            normalize_node(
                slots.slot(SlotRole.CREDITS),
                CREDITS_LABEL,
                config.aspect_crop,
                config.scale,
            )
        )
        chain.transition_nodes.append(
            crossfade_node(running, CREDITS_LABEL, transition, credits_offset, VIDEO_OUT)
        )
        offsets = offsets + [credits_offset]
    else:
        chain.transition_nodes.append(passthrough_node(running, VIDEO_OUT))

    chain.offsets = offsets
    return chain
