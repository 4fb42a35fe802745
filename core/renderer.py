"""
FFmpeg-based encoder for reel assembly.

Turns a CompositionPlan into a single ffmpeg invocation: looped still images,
audio inputs, the filter program and fixed H.264/AAC output options.
"""

import asyncio
import glob
import logging
import os
import shlex
import shutil
from typing import Any, Dict, List, Optional, Tuple

from core.errors import EncodeFailed
from core.models.render import CompositionPlan, RenderConfig
from core.assembly.graph import format_seconds

logger = logging.getLogger(__name__)

# Keep the tail of stderr; the ffmpeg banner at the top is noise
DIAGNOSTICS_TAIL = 2000


async def _communicate(process) -> Tuple[bytes, bytes]:
    """Wait for a child process, killing it if the caller is cancelled."""
    try:
        return await process.communicate()
    except asyncio.CancelledError:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
        raise


class FFmpegRenderer:
    """
    Runs ffmpeg and ffprobe for reel assembly.

    Handles:
    - Locating the ffmpeg and ffprobe executables
    - Probing media durations
    - Building and running the final encode command
    """

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        ffmpeg_path: Optional[str] = None,
        ffprobe_path: Optional[str] = None,
    ):
        """
        Initialize the renderer.

        Args:
            config: Render configuration (uses defaults if not provided)
            ffmpeg_path: Explicit ffmpeg executable (searched for if not provided)
            ffprobe_path: Explicit ffprobe executable (searched for if not provided)
        """
        self.config = config or RenderConfig()
        self._ffmpeg_path = ffmpeg_path or self._find_ffmpeg()
        self._ffprobe_path = ffprobe_path or self._find_ffprobe()

    @property
    def ffmpeg_path(self) -> str:
        return self._ffmpeg_path

    @property
    def ffprobe_path(self) -> Optional[str]:
        return self._ffprobe_path

    def _find_ffmpeg(self) -> str:
        """Find FFmpeg executable."""
        ffmpeg = shutil.which("ffmpeg")
        if ffmpeg:
            return ffmpeg

        # Check common locations on Windows
        common_paths = [
            r"C:\ffmpeg\bin\ffmpeg.exe",
            r"C:\Program Files\ffmpeg\bin\ffmpeg.exe",
        ]
        for path in common_paths:
            if os.path.exists(path):
                return path

        winget_base = os.path.expandvars(r"%LOCALAPPDATA%\Microsoft\WinGet\Packages")
        if os.path.exists(winget_base):
            matches = glob.glob(os.path.join(winget_base, "*FFmpeg*", "*", "bin", "ffmpeg.exe"))
            if matches:
                return matches[0]

        # Not found - spawning will fail with EncodeFailed
        return "ffmpeg"

    def _find_ffprobe(self) -> Optional[str]:
        """Find FFprobe, preferring PATH then the ffmpeg directory."""
        ffprobe = shutil.which("ffprobe")
        if ffprobe:
            return ffprobe

        ffmpeg_dir = os.path.dirname(self._ffmpeg_path)
        for name in ("ffprobe", "ffprobe.exe"):
            candidate = os.path.join(ffmpeg_dir, name)
            if ffmpeg_dir and os.path.exists(candidate):
                return candidate
        return None

    async def get_duration(self, media_path: str) -> Optional[float]:
        """Get duration of a media file using FFprobe, None if unknown."""
        if not os.path.exists(media_path) or not self._ffprobe_path:
            return None

        cmd = [
            self._ffprobe_path,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            media_path
        ]

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
            stdout, stderr = await _communicate(process)
        except OSError as e:
            logger.warning(f"ffprobe could not be started: {e}")
            return None

        if process.returncode != 0:
            logger.warning(f"ffprobe failed for {media_path}: {stderr.decode(errors='replace').strip()}")
            return None

        try:
            return float(stdout.decode().strip())
        except ValueError:
            return None

    def build_command(self, plan: CompositionPlan, output_path: str) -> List[str]:
        """
        Build the ffmpeg argv for a plan.

        Images are looped since a still is not a timed clip; -t caps the
        output at the total reel duration.
        """
        cmd = [self._ffmpeg_path]
        for path in plan.video_inputs:
            cmd.extend(["-loop", "1", "-i", path])
        for path in plan.audio_inputs:
            cmd.extend(["-i", path])

        cmd.extend(["-filter_complex", plan.program])
        cmd.extend(["-map", f"[{plan.video_label}]"])
        if plan.audio_label:
            cmd.extend(["-map", f"[{plan.audio_label}]", "-c:a", self.config.audio_codec])

        cmd.extend([
            "-c:v", self.config.video_codec,
            "-pix_fmt", self.config.pixel_format,
            "-t", format_seconds(plan.timing.total_duration),
            "-y",
            output_path
        ])
        return cmd

    async def encode(self, plan: CompositionPlan, output_path: str) -> str:
        """
        Encode a plan to a video file.

        Args:
            plan: Fully resolved composition plan
            output_path: Destination video file (overwritten if present)

        Returns:
            output_path on a clean exit

        Raises:
            EncodeFailed: If ffmpeg cannot be spawned or exits non-zero
        """
        cmd = self.build_command(plan, output_path)
        logger.info(f"Encoding {output_path} ({format_seconds(plan.timing.total_duration)}s)")
        logger.debug(f"ffmpeg command: {shlex.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            raise EncodeFailed(f"Could not start ffmpeg: {e}", diagnostics=str(e)) from e

        stdout, stderr = await _communicate(process)

        if process.returncode != 0:
            diagnostics = stderr.decode(errors="replace")[-DIAGNOSTICS_TAIL:]
            raise EncodeFailed(
                f"FFmpeg exited with code {process.returncode}",
                diagnostics=diagnostics,
            )

        return output_path

    async def check_ffmpeg_installed(self) -> Dict[str, Any]:
        """
        Check if FFmpeg is properly installed.

        Returns:
            Dict with installation status and version info
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self._ffmpeg_path, "-version",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
            stdout, stderr = await _communicate(process)

            if process.returncode == 0:
                version_line = stdout.decode().split('\n')[0]
                return {
                    "installed": True,
                    "path": self._ffmpeg_path,
                    "ffprobe": self._ffprobe_path,
                    "version": version_line
                }
        except FileNotFoundError:
            pass

        return {
            "installed": False,
            "path": None,
            "ffprobe": self._ffprobe_path,
            "version": None,
            "error": "FFmpeg not found. Please install FFmpeg and add it to your PATH."
        }
