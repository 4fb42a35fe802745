"""Core components - reel assembly, production pipeline and infrastructure"""

from .errors import (
    CompositionError,
    InvalidSegmentCount,
    ConfigInconsistent,
    DurationProbeFailed,
    AssetMissing,
    EncodeFailed,
    IndexAssignmentError,
)

# Note: ReelAssembler and ReelProducer are NOT imported here to keep the
# package import light. Import them directly:
#   from core.assembler import ReelAssembler
#   from core.producer import ReelProducer

__all__ = [
    "CompositionError",
    "InvalidSegmentCount",
    "ConfigInconsistent",
    "DurationProbeFailed",
    "AssetMissing",
    "EncodeFailed",
    "IndexAssignmentError",
]
