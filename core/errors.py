"""
Assembly error taxonomy.

Every failure inside the assembly engine is a CompositionError carrying a
machine-readable kind. ReelAssembler converts them into a failed
CompositionResult so callers only ever see one result type.
"""


class CompositionError(Exception):
    """Base class for all reel assembly failures."""

    kind = "composition_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidSegmentCount(CompositionError):
    """Raised when a request has no visual segments."""

    kind = "invalid_segment_count"


class ConfigInconsistent(CompositionError):
    """Raised when the transition does not fit inside a segment."""

    kind = "config_inconsistent"


class DurationProbeFailed(CompositionError):
    """Raised when ffprobe cannot report the narration duration."""

    kind = "duration_probe_failed"


class AssetMissing(CompositionError):
    """Raised when an input file does not exist at assembly time."""

    kind = "asset_missing"

    def __init__(self, path: str):
        super().__init__(f"Input asset not found: {path}")
        self.path = path


class EncodeFailed(CompositionError):
    """Raised when ffmpeg exits non-zero or cannot be spawned."""

    kind = "encode_failed"

    def __init__(self, message: str, diagnostics: str = ""):
        super().__init__(message)
        self.diagnostics = diagnostics


class IndexAssignmentError(CompositionError):
    """Raised when the input slot table is not injective and gapless.

    This indicates a programming error, not a bad request.
    """

    kind = "index_assignment_error"
