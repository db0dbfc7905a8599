"""
Segment Processors.

Render segment windows into standalone clips using FFmpeg.
"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import List

from ..domain.errors import SegmentProcessingError, TranscoderUnavailable
from ..domain.interfaces import SegmentProcessor
from ..domain.models import SegmentWindow


class FFmpegSegmentProcessor(SegmentProcessor):
    """
    FFmpeg-based segment processor.

    Each window goes through trim -> reverse -> concatenate, every step
    reading the file the previous step wrote. Without ping-pong only the
    trim step runs.
    """

    def __init__(self, ffmpeg_binary: str = "ffmpeg"):
        self.logger = logging.getLogger(__name__)
        self.ffmpeg_binary = ffmpeg_binary

        # Check if FFmpeg is available
        self._ffmpeg_path = shutil.which(ffmpeg_binary)
        if not self._ffmpeg_path:
            self.logger.warning(f"FFmpeg ({ffmpeg_binary}) not found - server-side splitting will be disabled")

    def is_available(self) -> bool:
        return self._ffmpeg_path is not None

    async def process(
        self,
        source_path: Path,
        window: SegmentWindow,
        output_path: Path,
        ping_pong: bool = True
    ) -> Path:
        """Render one window to ``output_path``"""
        if not self.is_available():
            raise TranscoderUnavailable("FFmpeg is not available on this server")

        output_path.parent.mkdir(parents=True, exist_ok=True)

        if not ping_pong:
            await self._run(self._build_trim_command(source_path, window, output_path, keep_audio=True), window)
            return output_path

        trimmed_path = output_path.with_name(f"{output_path.stem}.forward{output_path.suffix}")
        reversed_path = output_path.with_name(f"{output_path.stem}.reverse{output_path.suffix}")
        list_path = output_path.with_name(f"{output_path.stem}.concat.txt")

        try:
            await self._run(self._build_trim_command(source_path, window, trimmed_path, keep_audio=False), window)
            await self._run(self._build_reverse_command(trimmed_path, reversed_path), window)

            list_path.write_text(
                f"file '{self._concat_quote(trimmed_path)}'\nfile '{self._concat_quote(reversed_path)}'\n",
                encoding="utf-8"
            )
            await self._run(self._build_concat_command(list_path, output_path), window)
        finally:
            for intermediate in (trimmed_path, reversed_path, list_path):
                intermediate.unlink(missing_ok=True)

        return output_path

    async def _run(self, cmd: List[str], window: SegmentWindow) -> None:
        """Run one FFmpeg step, raising on a non-zero exit"""
        self.logger.debug(f"Running: {' '.join(cmd)}")

        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
        _, stderr = await process.communicate()

        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip() if stderr else "Unknown FFmpeg error"
            self.logger.error(f"FFmpeg failed on part {window.index + 1}: {error_msg}")
            raise SegmentProcessingError(f"Failed to process part {window.index + 1}", segment_index=window.index)

    def _build_trim_command(self, source_path: Path, window: SegmentWindow, target_path: Path, keep_audio: bool) -> List[str]:
        """Cut ``window`` out of the source, re-encoding for frame accuracy"""
        cmd = [
            self._ffmpeg_path,
            "-ss", f"{window.start_time:.6f}",
            "-i", str(source_path),
            "-t", f"{window.duration:.6f}",
            "-c:v", "libx264",
            "-pix_fmt", "yuv420p",
        ]
        if keep_audio:
            cmd.extend(["-c:a", "aac"])
        else:
            # Reversed playback has no meaningful audio track
            cmd.append("-an")
        cmd.extend(["-movflags", "+faststart", "-preset", "fast", "-y", str(target_path)])
        return cmd

    def _build_reverse_command(self, source_path: Path, target_path: Path) -> List[str]:
        return [
            self._ffmpeg_path,
            "-i", str(source_path),
            "-vf", "reverse",
            "-an",
            "-c:v", "libx264",
            "-pix_fmt", "yuv420p",
            "-preset", "fast",
            "-y", str(target_path),
        ]

    def _build_concat_command(self, list_path: Path, target_path: Path) -> List[str]:
        # Both inputs share codec parameters, so streams are copied
        return [
            self._ffmpeg_path,
            "-f", "concat",
            "-safe", "0",
            "-i", str(list_path),
            "-c", "copy",
            "-movflags", "+faststart",
            "-y", str(target_path),
        ]

    @staticmethod
    def _concat_quote(path: Path) -> str:
        return str(path.resolve()).replace("'", "'\\''")
