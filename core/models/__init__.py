"""Data models for X-Reels"""

from .render import (
    AudioRole,
    SlotRole,
    VisualAsset,
    AudioAsset,
    Segment,
    CreditsSegment,
    Timeline,
    Timing,
    RenderConfig,
    CompositionRequest,
    CompositionPlan,
    CompositionResult,
)
from .script import (
    Scene,
    Script,
    Template,
    ReelMetadata,
)

__all__ = [
    # Render models
    "AudioRole",
    "SlotRole",
    "VisualAsset",
    "AudioAsset",
    "Segment",
    "CreditsSegment",
    "Timeline",
    "Timing",
    "RenderConfig",
    "CompositionRequest",
    "CompositionPlan",
    "CompositionResult",
    # Script models
    "Scene",
    "Script",
    "Template",
    "ReelMetadata",
]
