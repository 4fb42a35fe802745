"""
Input slot registry.

ffmpeg addresses inputs by their position on the command line. InputSlots is
the single table mapping each physical asset to that position; the visual and
audio builders and the encoder all read from it instead of recomputing
offsets.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from core.errors import IndexAssignmentError
from core.models.render import CompositionRequest, SlotRole


VIDEO_ROLES = (SlotRole.IMAGE, SlotRole.CREDITS)
AUDIO_ROLES = (SlotRole.NARRATION, SlotRole.MUSIC)


@dataclass(frozen=True)
class SlotEntry:
    """One assigned input"""
    index: int
    role: SlotRole
    ordinal: int
    path: str

    @property
    def is_video(self) -> bool:
        return self.role in VIDEO_ROLES


class InputSlots:
    """
    Validated mapping of (role, ordinal) to ffmpeg input index.

    Order is fixed: scene images in request order, the credits image, the
    narration track, the music track.
    """

    def __init__(self, entries: List[SlotEntry]):
        self._entries = sorted(entries, key=lambda e: e.index)
        self._lookup: Dict[Tuple[SlotRole, int], SlotEntry] = {}
        for entry in self._entries:
            key = (entry.role, entry.ordinal)
            if key in self._lookup:
                raise IndexAssignmentError(
                    f"{entry.role.value}#{entry.ordinal} assigned more than once"
                )
            self._lookup[key] = entry
        self.validate()

    @classmethod
    def from_request(cls, request: CompositionRequest, include_credits: bool) -> "InputSlots":
        """
        Assign slots for a request.

        Args:
            request: The composition request
            include_credits: Whether the credits image takes part in the reel

        Returns:
            InputSlots covering every asset the reel uses
        """
        assets: List[Tuple[SlotRole, int, str]] = [
            (SlotRole.IMAGE, i, image.path) for i, image in enumerate(request.images)
        ]
        if include_credits:
            assets.append((SlotRole.CREDITS, 0, request.credits_image))
        if request.uses_narration:
            assets.append((SlotRole.NARRATION, 0, request.narration.path))
        if request.music is not None:
            assets.append((SlotRole.MUSIC, 0, request.music.path))

        entries = [
            SlotEntry(index=i, role=role, ordinal=ordinal, path=path)
            for i, (role, ordinal, path) in enumerate(assets)
        ]
        return cls(entries)

    @staticmethod
    def expected_count(image_count: int, credits: bool, narration: bool, music: bool) -> int:
        return image_count + int(credits) + int(narration) + int(music)

    def validate(self) -> None:
        """Check the table is injective, gapless and ordered by role."""
        indices = [e.index for e in self._entries]
        if len(set(indices)) != len(indices):
            raise IndexAssignmentError(f"Duplicate input index in {indices}")
        if indices != list(range(len(indices))):
            raise IndexAssignmentError(f"Input indices are not gapless: {indices}")

        images = [e for e in self._entries if e.role == SlotRole.IMAGE]
        if [e.ordinal for e in images] != list(range(len(images))):
            raise IndexAssignmentError("Scene images are not in request order")

        # Video inputs first, then narration before music
        rank = {SlotRole.IMAGE: 0, SlotRole.CREDITS: 1, SlotRole.NARRATION: 2, SlotRole.MUSIC: 3}
        ranks = [rank[e.role] for e in self._entries]
        if ranks != sorted(ranks):
            raise IndexAssignmentError("Inputs are not grouped video-first")

        expected = self.expected_count(
            len(images),
            self.has(SlotRole.CREDITS),
            self.has(SlotRole.NARRATION),
            self.has(SlotRole.MUSIC),
        )
        if expected != len(self._entries):
            raise IndexAssignmentError(
                f"Expected {expected} input slots, found {len(self._entries)}"
            )

    def slot(self, role: SlotRole, ordinal: int = 0) -> int:
        entry = self._lookup.get((role, ordinal))
        if entry is None:
            raise IndexAssignmentError(f"No input slot for {role.value}#{ordinal}")
        return entry.index

    def has(self, role: SlotRole) -> bool:
        return (role, 0) in self._lookup

    def path(self, role: SlotRole, ordinal: int = 0) -> str:
        self.slot(role, ordinal)
        return self._lookup[(role, ordinal)].path

    def find(self, role: SlotRole, ordinal: int = 0) -> Optional[SlotEntry]:
        return self._lookup.get((role, ordinal))

    @property
    def image_slots(self) -> List[int]:
        return [e.index for e in self._entries if e.role == SlotRole.IMAGE]

    @property
    def video_paths(self) -> List[str]:
        return [e.path for e in self._entries if e.is_video]

    @property
    def audio_paths(self) -> List[str]:
        return [e.path for e in self._entries if not e.is_video]

    def __iter__(self) -> Iterator[SlotEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        table = ", ".join(f"{e.index}={e.role.value}#{e.ordinal}" for e in self._entries)
        return f"InputSlots({table})"
