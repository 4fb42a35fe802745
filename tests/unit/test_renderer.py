"""Unit tests for FFmpegRenderer"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from core.assembler import ReelAssembler
from core.errors import EncodeFailed
from core.renderer import DIAGNOSTICS_TAIL, FFmpegRenderer
from tests.mocks.fixtures import make_request


@pytest.fixture
def renderer():
    """Renderer with fixed executable paths"""
    return FFmpegRenderer(ffmpeg_path="ffmpeg", ffprobe_path="ffprobe")


def mock_process(returncode=0, stdout=b"", stderr=b""):
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    return process


def hanging_process(returncode=None):
    """A child that never finishes on its own"""
    async def communicate():
        await asyncio.sleep(30)

    process = MagicMock()
    process.returncode = returncode
    process.communicate = communicate
    process.wait = AsyncMock(return_value=-9)
    return process


async def make_plan(tmp_path, renderer, duration=12.0, **flags):
    assembler = ReelAssembler(renderer=renderer)
    request = make_request(tmp_path, **flags)
    with patch("core.assembler.get_audio_duration", AsyncMock(return_value=duration)):
        return await assembler.plan(request), request


class TestBuildCommand:
    """Tests for ffmpeg argv construction"""

    @pytest.mark.asyncio
    async def test_silent_command(self, tmp_path, renderer):
        plan, request = await make_plan(tmp_path, renderer, count=1, silent=True)
        cmd = renderer.build_command(plan, "out.mp4")

        assert cmd == [
            "ffmpeg",
            "-loop", "1", "-i", request.images[0].path,
            "-filter_complex", plan.program,
            "-map", "[v_out]",
            "-c:v", "libx264",
            "-pix_fmt", "yuv420p",
            "-t", "4",
            "-y",
            "out.mp4",
        ]

    @pytest.mark.asyncio
    async def test_audio_inputs_follow_images(self, tmp_path, renderer):
        plan, request = await make_plan(tmp_path, renderer, count=3, narration=True, music=True, credits=True)
        cmd = renderer.build_command(plan, "out.mp4")

        inputs = [cmd[i + 1] for i, arg in enumerate(cmd) if arg == "-i"]
        assert inputs == [
            request.images[0].path,
            request.images[1].path,
            request.images[2].path,
            request.credits_image,
            request.narration.path,
            request.music.path,
        ]
        # Only still images are looped
        assert cmd.count("-loop") == 4
        assert cmd[cmd.index("-t") + 1] == "14.5"

    @pytest.mark.asyncio
    async def test_audio_map_and_codec(self, tmp_path, renderer):
        plan, _ = await make_plan(tmp_path, renderer, count=2, narration=True)
        cmd = renderer.build_command(plan, "out.mp4")

        maps = [cmd[i + 1] for i, arg in enumerate(cmd) if arg == "-map"]
        assert maps == ["[v_out]", "[a_out]"]
        assert cmd[cmd.index("-c:a") + 1] == "aac"

    @pytest.mark.asyncio
    async def test_no_audio_codec_when_silent(self, tmp_path, renderer):
        plan, _ = await make_plan(tmp_path, renderer, count=2)
        assert "-c:a" not in renderer.build_command(plan, "out.mp4")


class TestEncode:
    """Tests for running ffmpeg"""

    @pytest.mark.asyncio
    async def test_success(self, tmp_path, renderer):
        plan, _ = await make_plan(tmp_path, renderer, count=1)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=mock_process())) as spawn:
            result = await renderer.encode(plan, "out.mp4")

        assert result == "out.mp4"
        assert spawn.call_args.args[0] == "ffmpeg"

    @pytest.mark.asyncio
    async def test_nonzero_exit(self, tmp_path, renderer):
        plan, _ = await make_plan(tmp_path, renderer, count=1)
        stderr = b"x" * 5000 + b"Invalid data found"
        process = mock_process(returncode=1, stderr=stderr)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(EncodeFailed) as exc:
                await renderer.encode(plan, "out.mp4")

        assert "code 1" in exc.value.message
        assert exc.value.diagnostics.endswith("Invalid data found")
        assert len(exc.value.diagnostics) == DIAGNOSTICS_TAIL

    @pytest.mark.asyncio
    async def test_cancel_kills_ffmpeg(self, tmp_path, renderer):
        plan, _ = await make_plan(tmp_path, renderer, count=1)
        process = hanging_process()

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(renderer.encode(plan, "out.mp4"), timeout=0.05)

        process.kill.assert_called_once()
        process.wait.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_finished_process_not_killed_on_cancel(self, tmp_path, renderer):
        plan, _ = await make_plan(tmp_path, renderer, count=1)
        process = hanging_process(returncode=0)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(renderer.encode(plan, "out.mp4"), timeout=0.05)

        process.kill.assert_not_called()

    @pytest.mark.asyncio
    async def test_spawn_failure(self, tmp_path, renderer):
        plan, _ = await make_plan(tmp_path, renderer, count=1)
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("ffmpeg"))):
            with pytest.raises(EncodeFailed):
                await renderer.encode(plan, "out.mp4")


class TestGetDuration:
    """Tests for ffprobe duration probing"""

    @pytest.mark.asyncio
    async def test_parses_duration(self, tmp_path, renderer):
        media = tmp_path / "audio.mp3"
        media.write_bytes(b"fake")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=mock_process(stdout=b"12.48\n"))):
            assert await renderer.get_duration(str(media)) == 12.48

    @pytest.mark.asyncio
    async def test_cancel_kills_ffprobe(self, tmp_path, renderer):
        media = tmp_path / "audio.mp3"
        media.write_bytes(b"fake")
        process = hanging_process()

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(renderer.get_duration(str(media)), timeout=0.05)

        process.kill.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path, renderer):
        assert await renderer.get_duration(str(tmp_path / "absent.mp3")) is None

    @pytest.mark.asyncio
    async def test_probe_failure(self, tmp_path, renderer):
        media = tmp_path / "audio.mp3"
        media.write_bytes(b"fake")
        process = mock_process(returncode=1, stderr=b"Invalid data")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            assert await renderer.get_duration(str(media)) is None


class TestCheckInstalled:

    @pytest.mark.asyncio
    async def test_installed(self, renderer):
        process = mock_process(stdout=b"ffmpeg version 6.1\nbuilt with gcc")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            info = await renderer.check_ffmpeg_installed()
        assert info["installed"] is True
        assert info["version"] == "ffmpeg version 6.1"

    @pytest.mark.asyncio
    async def test_not_installed(self, renderer):
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError())):
            info = await renderer.check_ffmpeg_installed()
        assert info["installed"] is False
