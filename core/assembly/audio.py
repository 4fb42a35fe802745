"""
Audio bus construction.

The reel has at most two audio inputs, narration and music. Which of them are
present selects one of four fixed mixes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from core.assembly.graph import FilterNode, mix_node, passthrough_node, stream, volume_node
from core.assembly.indexer import InputSlots
from core.models.render import AudioAsset, AudioRole, RenderConfig, SlotRole, Timing


AUDIO_OUT = "a_out"


class AudioBusCase(Enum):
    """The four narration/music combinations"""
    NARRATION_AND_MUSIC = "narration_and_music"
    NARRATION_ONLY = "narration_only"
    MUSIC_ONLY = "music_only"
    SILENT = "silent"


@dataclass
class AudioBus:
    """
    Audio nodes for the reel.

    Attributes:
        case: Which mix was selected
        nodes: Filter nodes, empty for a silent reel
        tracks: Audio inputs with the volume and trim actually applied
        output_label: Final audio label, None when the reel has no audio
    """
    case: AudioBusCase
    nodes: List[FilterNode] = field(default_factory=list)
    tracks: List[AudioAsset] = field(default_factory=list)
    output_label: Optional[str] = None


def select_case(narration_present: bool, music_present: bool) -> AudioBusCase:
    if narration_present and music_present:
        return AudioBusCase.NARRATION_AND_MUSIC
    if narration_present:
        return AudioBusCase.NARRATION_ONLY
    if music_present:
        return AudioBusCase.MUSIC_ONLY
    return AudioBusCase.SILENT


def build_audio_bus(
    slots: InputSlots,
    timing: Timing,
    config: Optional[RenderConfig] = None,
) -> AudioBus:
    """
    Build the audio mix for the inputs registered in ``slots``.

    Music is always trimmed to the total reel length; narration is never
    trimmed since it defines the narrated length.
    """
    config = config or RenderConfig()
    case = select_case(slots.has(SlotRole.NARRATION), slots.has(SlotRole.MUSIC))
    bus = AudioBus(case=case)

    if case == AudioBusCase.SILENT:
        return bus

    if case == AudioBusCase.NARRATION_ONLY:
        slot = slots.slot(SlotRole.NARRATION)
        bus.tracks.append(AudioAsset(
            path=slots.path(SlotRole.NARRATION),
            role=AudioRole.NARRATION,
            volume=config.narration_volume,
        ))
        bus.nodes.append(passthrough_node(stream(slot, "a"), AUDIO_OUT, audio=True))

    elif case == AudioBusCase.MUSIC_ONLY:
        music = AudioAsset(
            path=slots.path(SlotRole.MUSIC),
            role=AudioRole.MUSIC,
            volume=config.music_only_volume,
            trim_to=timing.total_duration,
        )
        bus.tracks.append(music)
        bus.nodes.append(
            volume_node(slots.slot(SlotRole.MUSIC), music.volume, AUDIO_OUT, music.trim_to)
        )

    else:
        narration = AudioAsset(
            path=slots.path(SlotRole.NARRATION),
            role=AudioRole.NARRATION,
            volume=config.narration_volume,
        )
        music = AudioAsset(
            path=slots.path(SlotRole.MUSIC),
            role=AudioRole.MUSIC,
            volume=config.music_under_narration_volume,
            trim_to=timing.total_duration,
        )
        bus.tracks.extend([narration, music])
        bus.nodes.extend([
            volume_node(slots.slot(SlotRole.NARRATION), narration.volume, "narration"),
            volume_node(slots.slot(SlotRole.MUSIC), music.volume, "bgm", music.trim_to),
            # duration=first keeps the mix as long as the narration
            mix_node(["narration", "bgm"], AUDIO_OUT, duration="first"),
        ])

    bus.output_label = AUDIO_OUT
    return bus
