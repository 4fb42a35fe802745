"""
Typed ffmpeg filter graph.

Nodes carry their input labels, filter chain and output label explicitly;
FilterGraph.render() is the only place that turns them into the textual
-filter_complex program.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from core.errors import IndexAssignmentError


_STREAM_SPEC = re.compile(r"^\d+:[va]$")


class NodeKind(Enum):
    """What a node does in the reel graph"""
    NORMALIZE = "normalize"
    CROSSFADE = "crossfade"
    PASSTHROUGH = "passthrough"
    AUDIO = "audio"
    MIX = "mix"


class GraphError(IndexAssignmentError):
    """Raised when nodes reference labels that were never produced."""
    pass


def format_seconds(value: float) -> str:
    """Render a time value with millisecond precision and no trailing zeros."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_volume(value: float) -> str:
    return f"{value:.2f}"


def stream(slot: int, media: str) -> str:
    """Label for the video or audio stream of an input slot, e.g. '0:v'."""
    return f"{slot}:{media}"


@dataclass(frozen=True)
class FilterNode:
    """
    One filter chain statement.

    Attributes:
        kind: Role of the node in the reel graph
        inputs: Labels consumed, without brackets
        filters: Filter expressions applied in order
        output: Label produced, without brackets
    """
    kind: NodeKind
    inputs: Tuple[str, ...]
    filters: Tuple[str, ...]
    output: str

    def render(self) -> str:
        sources = "".join(f"[{label}]" for label in self.inputs)
        return f"{sources}{','.join(self.filters)}[{self.output}]"


def normalize_node(slot: int, output: str, crop: Optional[str], scale: str) -> FilterNode:
    filters = [crop] if crop else []
    filters.extend([scale, "setsar=1"])
    return FilterNode(NodeKind.NORMALIZE, (stream(slot, "v"),), tuple(filters), output)


def crossfade_node(first: str, second: str, duration: float, offset: float, output: str) -> FilterNode:
    expr = (
        f"xfade=transition=fade:duration={format_seconds(duration)}"
        f":offset={format_seconds(offset)}"
    )
    return FilterNode(NodeKind.CROSSFADE, (first, second), (expr,), output)


def passthrough_node(source: str, output: str, audio: bool = False) -> FilterNode:
    return FilterNode(NodeKind.PASSTHROUGH, (source,), ("acopy" if audio else "copy",), output)


def volume_node(slot: int, volume: float, output: str, trim_to: Optional[float] = None) -> FilterNode:
    filters = [f"volume={format_volume(volume)}"]
    if trim_to is not None:
        filters.append(f"atrim=0:{format_seconds(trim_to)}")
    return FilterNode(NodeKind.AUDIO, (stream(slot, "a"),), tuple(filters), output)


def mix_node(sources: List[str], output: str, duration: str = "first") -> FilterNode:
    expr = f"amix=inputs={len(sources)}:duration={duration}"
    return FilterNode(NodeKind.MIX, tuple(sources), (expr,), output)


@dataclass
class FilterGraph:
    """Ordered list of nodes with label bookkeeping."""
    nodes: List[FilterNode] = field(default_factory=list)

    def add(self, node: FilterNode) -> FilterNode:
        produced = self.labels()
        if node.output in produced:
            raise GraphError(f"Label '{node.output}' is produced twice")
        for label in node.inputs:
            if not _STREAM_SPEC.match(label) and label not in produced:
                raise GraphError(f"Node '{node.output}' reads undefined label '{label}'")
        self.nodes.append(node)
        return node

    def extend(self, nodes: List[FilterNode]) -> None:
        for node in nodes:
            self.add(node)

    def labels(self) -> List[str]:
        return [n.output for n in self.nodes]

    def render(self) -> str:
        return "; ".join(node.render() for node in self.nodes)
