"""Test data factories for consistent test setup"""

from pathlib import Path
from typing import List, Optional

from core.models.render import CompositionRequest
from core.models.script import Scene, Script


def make_images(directory: Path, count: int) -> List[str]:
    """Create placeholder image files"""
    paths = []
    for i in range(count):
        path = directory / f"image_{i}.png"
        path.write_bytes(b"\x89PNG fake")
        paths.append(str(path))
    return paths


def make_audio(directory: Path, name: str) -> str:
    path = directory / name
    path.write_bytes(b"ID3 fake")
    return str(path)


def make_request(
    directory: Path,
    count: int = 3,
    narration: bool = False,
    music: bool = False,
    credits: bool = False,
    silent: bool = False,
    output: str = "reel.mp4",
) -> CompositionRequest:
    """Factory for CompositionRequest objects backed by real files"""
    credits_path: Optional[str] = None
    if credits:
        credits_path = str(directory / "credits.png")
        Path(credits_path).write_bytes(b"\x89PNG credits")

    return CompositionRequest.from_paths(
        image_paths=make_images(directory, count),
        output_path=str(directory / output),
        narration_path=make_audio(directory, "audio.mp3") if narration else None,
        music_path=make_audio(directory, "bgm.mp3") if music else None,
        silent=silent,
        credits_image=credits_path,
        credits_enabled=credits,
    )


def make_script(count: int = 3) -> Script:
    """Factory for Script objects"""
    return Script(scenes=[
        Scene(narration=f"Sentence number {i + 1}.", visual_prompt=f"A cinematic shot {i + 1}")
        for i in range(count)
    ])


def fixed_probe(duration: Optional[float]):
    """Async probe returning a fixed duration"""
    calls = []

    async def probe(path: str) -> Optional[float]:
        calls.append(path)
        return duration

    probe.calls = calls
    return probe
