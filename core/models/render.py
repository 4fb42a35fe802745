"""
Render models for reel assembly

These models describe the assets going into a reel, the timing and input
plan derived from them, and the result of encoding the final video.
"""

from dataclasses import dataclass, field
from math import gcd
from typing import TYPE_CHECKING, List, Optional, Tuple
from enum import Enum

if TYPE_CHECKING:
    from core.assembly.indexer import InputSlots


class AudioRole(Enum):
    """Role an audio input plays in the final mix"""
    NARRATION = "narration"
    MUSIC = "music"


class SlotRole(Enum):
    """Kinds of physical inputs handed to ffmpeg"""
    IMAGE = "image"
    CREDITS = "credits"
    NARRATION = "narration"
    MUSIC = "music"


@dataclass(frozen=True)
class VisualAsset:
    """
    A still image shown for one scene.

    Attributes:
        path: Path to the image file
        ordinal: 0-based position of the scene in the reel
    """
    path: str
    ordinal: int = 0


@dataclass(frozen=True)
class AudioAsset:
    """
    An audio file mixed into the reel.

    Attributes:
        path: Path to the audio file
        role: Narration or background music
        volume: Linear volume multiplier applied in the mix
        trim_to: Trim the track to this many seconds (None = untrimmed)
    """
    path: str
    role: AudioRole = AudioRole.NARRATION
    volume: float = 1.0
    trim_to: Optional[float] = None


@dataclass(frozen=True)
class Segment:
    """One still image plus its resolved on-screen duration"""
    asset: VisualAsset
    duration: float


@dataclass(frozen=True)
class CreditsSegment:
    """Optional trailing credits image with a fixed duration"""
    asset: VisualAsset
    duration: float = 2.5


@dataclass
class Timeline:
    """Ordered segments, optional credits and the crossfade length"""
    segments: List[Segment] = field(default_factory=list)
    credits: Optional[CreditsSegment] = None
    transition_duration: float = 0.5

    @property
    def duration(self) -> float:
        total = sum(s.duration for s in self.segments)
        if self.credits:
            total += self.credits.duration
        return total


@dataclass(frozen=True)
class Timing:
    """
    Resolved durations for one reel, all in seconds.

    Attributes:
        narration_duration: Length of the narrated part of the reel
        credits_duration: Length of the credits tail (0 when disabled)
        total_duration: narration_duration + credits_duration
        segment_duration: narration_duration / segment_count
        segment_count: Number of scene images
        transition_duration: Crossfade length between segments
    """
    narration_duration: float
    credits_duration: float
    total_duration: float
    segment_duration: float
    segment_count: int
    transition_duration: float = 0.5


@dataclass
class RenderConfig:
    """
    Configuration for rendering a reel.

    Attributes:
        output_width: Output video width in pixels
        output_height: Output video height in pixels
        video_codec: Video codec passed to ffmpeg
        audio_codec: Audio codec used when the reel has sound
        pixel_format: Pixel format (yuv420p for compatibility)
    """
    output_width: int = 1080
    output_height: int = 1920
    video_codec: str = "libx264"
    audio_codec: str = "aac"
    pixel_format: str = "yuv420p"

    # Timing constants (seconds)
    transition_duration: float = 0.5
    credits_duration: float = 2.5
    silent_segment_duration: float = 4.0

    # Mix levels (linear multipliers)
    narration_volume: float = 1.0
    music_under_narration_volume: float = 0.15
    music_only_volume: float = 0.25

    @property
    def aspect_crop(self) -> str:
        """Crop expression keeping full height at the output aspect ratio"""
        divisor = gcd(self.output_width, self.output_height)
        return f"crop=ih*{self.output_width // divisor}/{self.output_height // divisor}:ih"

    @property
    def scale(self) -> str:
        return f"scale={self.output_width}:{self.output_height}"


@dataclass
class CompositionRequest:
    """
    Everything needed to assemble one reel.

    Attributes:
        images: One visual asset per scene, in scene order
        output_path: Destination video file
        narration: Optional narration track
        music: Optional background music track
        silent: Ignore narration and use synthetic timing
        credits_enabled: Append the credits image if it exists
        credits_image: Path to the credits image
    """
    images: List[VisualAsset]
    output_path: str = "reel.mp4"
    narration: Optional[AudioAsset] = None
    music: Optional[AudioAsset] = None
    silent: bool = False
    credits_enabled: bool = False
    credits_image: Optional[str] = None

    @classmethod
    def from_paths(
        cls,
        image_paths: List[str],
        output_path: str,
        narration_path: Optional[str] = None,
        music_path: Optional[str] = None,
        silent: bool = False,
        credits_image: Optional[str] = None,
        credits_enabled: bool = False,
    ) -> "CompositionRequest":
        """Build a request from plain file paths"""
        return cls(
            images=[VisualAsset(path=str(p), ordinal=i) for i, p in enumerate(image_paths)],
            output_path=str(output_path),
            narration=AudioAsset(path=str(narration_path), role=AudioRole.NARRATION) if narration_path else None,
            music=AudioAsset(path=str(music_path), role=AudioRole.MUSIC) if music_path else None,
            silent=silent,
            credits_enabled=credits_enabled,
            credits_image=str(credits_image) if credits_image else None,
        )

    @property
    def segment_count(self) -> int:
        return len(self.images)

    @property
    def uses_narration(self) -> bool:
        """Narration is used only when present and the reel is not silent"""
        return self.narration is not None and not self.silent


@dataclass
class CompositionPlan:
    """
    The fully resolved plan handed to the encoder.

    Attributes:
        timing: Resolved durations
        slots: Input slot registry
        program: Filter graph program text for -filter_complex
        video_label: Final video stream label
        audio_label: Final audio stream label, None for a silent reel
        video_inputs: Looped image inputs in slot order
        audio_inputs: Audio inputs in slot order
        crossfade_offsets: Offsets of every xfade, credits fade last
        timeline: Scene segments and credits laid out with their durations
    """
    timing: Timing
    slots: "InputSlots"
    program: str
    video_label: str
    audio_label: Optional[str] = None
    video_inputs: List[str] = field(default_factory=list)
    audio_inputs: List[str] = field(default_factory=list)
    crossfade_offsets: Tuple[float, ...] = ()
    timeline: Optional[Timeline] = None

    @property
    def has_audio(self) -> bool:
        return self.audio_label is not None


@dataclass
class CompositionResult:
    """
    Result from an assembly.

    Attributes:
        success: Whether the reel was encoded
        output_path: Path to the encoded video
        duration: Total reel duration in seconds
        render_time: Wall time spent assembling in seconds
        error_kind: CompositionError.kind when the assembly failed
        error_message: Human readable diagnostic when the assembly failed
        ffmpeg_command: The ffmpeg command that was executed
    """
    success: bool
    output_path: Optional[str] = None
    duration: Optional[float] = None
    render_time: Optional[float] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    ffmpeg_command: Optional[str] = None
