"""Reel assembly engine - timing, input slots and filter graph construction"""

from .durations import resolve_durations, build_timeline, credits_present
from .indexer import InputSlots, SlotEntry
from .visual import VisualChain, build_visual_chain, crossfade_offsets
from .audio import AudioBus, AudioBusCase, build_audio_bus, select_case
from .emitter import GraphProgram, emit_program
from .graph import FilterGraph, FilterNode, NodeKind, GraphError

__all__ = [
    "resolve_durations",
    "build_timeline",
    "credits_present",
    "InputSlots",
    "SlotEntry",
    "VisualChain",
    "build_visual_chain",
    "crossfade_offsets",
    "AudioBus",
    "AudioBusCase",
    "build_audio_bus",
    "select_case",
    "GraphProgram",
    "emit_program",
    "FilterGraph",
    "FilterNode",
    "NodeKind",
    "GraphError",
]
