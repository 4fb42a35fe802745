"""Concatenates visual and audio nodes into one filter program."""

from dataclasses import dataclass
from typing import Optional

from core.assembly.audio import AudioBus
from core.assembly.graph import FilterGraph
from core.assembly.visual import VisualChain


@dataclass(frozen=True)
class GraphProgram:
    """Filter program text plus the labels handed to -map"""
    text: str
    video_label: str
    audio_label: Optional[str] = None

    @property
    def maps(self) -> list:
        labels = [self.video_label]
        if self.audio_label:
            labels.append(self.audio_label)
        return [f"[{label}]" for label in labels]


def emit_program(visual: VisualChain, audio: AudioBus) -> GraphProgram:
    """Order is fixed: normalization, transitions, audio."""
    graph = FilterGraph()
    graph.extend(visual.normalize_nodes)
    graph.extend(visual.transition_nodes)
    graph.extend(audio.nodes)
    return GraphProgram(
        text=graph.render(),
        video_label=visual.output_label,
        audio_label=audio.output_label,
    )
