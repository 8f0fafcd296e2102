"""
Media processing service.

Rewrites MP4 containers for fast start using ffmpeg stream copy.
"""
from dataclasses import dataclass
from pathlib import Path
import subprocess

from videos.errors import ToolFailureError
from videos.service.config import get_ffmpeg_command
from videos.service.constants import PROCESSED_SUFFIX
from videos.service.media_info import describe_returncode


@dataclass
class ProcessedFileInfo:
    """Information about a processed file"""
    path: Path
    file_size: int


def get_processed_path(input_path):
    """Output path for the fast-start rewrite of input_path"""
    input_path = Path(input_path)
    return input_path.with_name(input_path.name + PROCESSED_SUFFIX)


def process_video_for_fast_start(input_path, logger=None):
    """
    Move the moov atom to the front of an MP4 so playback can start early.

    Streams are copied, not re-encoded, and existing metadata is kept.

    Args:
        input_path: Path to the staged MP4
        logger: Optional callable(str) for logging

    Returns:
        ProcessedFileInfo for '<input_path>.processed'

    Raises:
        ToolFailureError: If ffmpeg fails or times out (stderr attached)
    """
    def log(message):
        if logger:
            logger(message)

    input_path = Path(input_path)
    output_path = get_processed_path(input_path)
    ffmpeg_bin, timeout = get_ffmpeg_command()

    cmd = [
        ffmpeg_bin,
        '-y',  # Overwrite output file
        '-i', str(input_path),
        '-movflags', 'faststart',
        '-map_metadata', '0',  # Copy existing metadata from input
        '-codec', 'copy',
        '-f', 'mp4',
        str(output_path),
    ]

    log(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise ToolFailureError(f"ffmpeg not found: {ffmpeg_bin}") from e
    except subprocess.TimeoutExpired as e:
        raise ToolFailureError(f"ffmpeg timed out after {timeout}s") from e

    if result.returncode != 0:
        status = describe_returncode(result.returncode)
        log(f"ffmpeg stderr: {result.stderr}")
        raise ToolFailureError(f"ffmpeg failed with {status}", stderr=result.stderr)

    if not output_path.exists():
        raise ToolFailureError(f"ffmpeg produced no output at {output_path}", stderr=result.stderr)

    file_size = output_path.stat().st_size
    log(f"Fast start rewrite complete: {file_size} bytes")

    return ProcessedFileInfo(path=output_path, file_size=file_size)
