"""Unit tests for ReelAssembler"""

import asyncio

import pytest
from unittest.mock import AsyncMock, patch

from core.assembler import ReelAssembler
from core.errors import AssetMissing, EncodeFailed
from core.models.render import CompositionRequest, VisualAsset
from core.renderer import FFmpegRenderer
from tests.mocks.fixtures import make_request


@pytest.fixture
def renderer():
    renderer = FFmpegRenderer(ffmpeg_path="ffmpeg", ffprobe_path="ffprobe")
    renderer.encode = AsyncMock(side_effect=lambda plan, output_path: output_path)
    return renderer


@pytest.fixture
def assembler(renderer):
    return ReelAssembler(renderer=renderer)


@pytest.fixture
def narration_duration():
    with patch("core.assembler.get_audio_duration", AsyncMock(return_value=12.0)) as probe:
        yield probe


class TestCheckAssets:

    def test_missing_image(self, tmp_path, assembler):
        request = make_request(tmp_path, count=2)
        request.images[1] = VisualAsset(path=str(tmp_path / "gone.png"), ordinal=1)
        with pytest.raises(AssetMissing) as exc:
            assembler.check_assets(request)
        assert exc.value.path.endswith("gone.png")

    def test_silent_ignores_missing_narration(self, tmp_path, assembler):
        request = CompositionRequest.from_paths(
            image_paths=[str((tmp_path / "a.png"))],
            output_path=str(tmp_path / "out.mp4"),
            narration_path=str(tmp_path / "absent.mp3"),
            silent=True,
        )
        (tmp_path / "a.png").write_bytes(b"png")
        assembler.check_assets(request)

    def test_missing_music(self, tmp_path, assembler):
        request = CompositionRequest.from_paths(
            image_paths=[str(tmp_path / "a.png")],
            output_path=str(tmp_path / "out.mp4"),
            music_path=str(tmp_path / "absent.mp3"),
        )
        (tmp_path / "a.png").write_bytes(b"png")
        with pytest.raises(AssetMissing):
            assembler.check_assets(request)


class TestAssemble:

    @pytest.mark.asyncio
    async def test_success(self, tmp_path, assembler, renderer, narration_duration):
        request = make_request(tmp_path, count=3, narration=True, credits=True)
        result = await assembler.assemble(request)

        assert result.success
        assert result.output_path == request.output_path
        assert result.duration == 14.5
        assert result.error_kind is None
        assert "-filter_complex" in result.ffmpeg_command
        narration_duration.assert_awaited_once()
        renderer.encode.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_plan_contents(self, tmp_path, assembler, narration_duration):
        request = make_request(tmp_path, count=3, narration=True, music=True, credits=True)
        plan = await assembler.plan(request)

        assert plan.crossfade_offsets == (3.5, 7.5, 11.5)
        assert plan.has_audio
        assert len(plan.video_inputs) == 4
        assert plan.audio_inputs == [request.narration.path, request.music.path]
        assert plan.timeline.duration == plan.timing.total_duration

    @pytest.mark.asyncio
    async def test_no_images(self, tmp_path, assembler):
        result = await assembler.assemble(CompositionRequest(images=[], output_path=str(tmp_path / "x.mp4")))
        assert not result.success
        assert result.error_kind == "invalid_segment_count"

    @pytest.mark.asyncio
    async def test_missing_asset(self, tmp_path, assembler, renderer):
        request = CompositionRequest.from_paths([str(tmp_path / "nope.png")], str(tmp_path / "x.mp4"))
        result = await assembler.assemble(request)

        assert result.error_kind == "asset_missing"
        assert "nope.png" in result.error_message
        renderer.encode.assert_not_called()

    @pytest.mark.asyncio
    async def test_probe_failure(self, tmp_path, assembler):
        request = make_request(tmp_path, count=2, narration=True)
        with patch("core.assembler.get_audio_duration", AsyncMock(return_value=None)):
            result = await assembler.assemble(request)
        assert result.error_kind == "duration_probe_failed"

    @pytest.mark.asyncio
    async def test_transition_too_long(self, tmp_path, assembler):
        request = make_request(tmp_path, count=8, narration=True)
        with patch("core.assembler.get_audio_duration", AsyncMock(return_value=3.0)):
            result = await assembler.assemble(request)
        assert result.error_kind == "config_inconsistent"

    @pytest.mark.asyncio
    async def test_encode_failure_carries_diagnostics(self, tmp_path, assembler, renderer):
        renderer.encode = AsyncMock(side_effect=EncodeFailed("FFmpeg exited with code 1", "Error opening input"))
        result = await assembler.assemble(make_request(tmp_path, count=1))

        assert not result.success
        assert result.error_kind == "encode_failed"
        assert result.error_message == "FFmpeg exited with code 1\nError opening input"
        assert result.ffmpeg_command.startswith("ffmpeg ")

    @pytest.mark.asyncio
    async def test_concurrent_assemblies_are_independent(self, tmp_path, assembler, narration_duration):
        first_dir = tmp_path / "first"
        second_dir = tmp_path / "second"
        first_dir.mkdir()
        second_dir.mkdir()

        first, second = await asyncio.gather(
            assembler.assemble(make_request(first_dir, count=3, narration=True)),
            assembler.assemble(make_request(second_dir, count=1)),
        )
        assert first.duration == 12.0
        assert second.duration == 4.0
