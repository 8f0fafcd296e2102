"""
Media metadata helpers.

Centralizes ffprobe parsing and aspect ratio classification.
"""

import json
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path

from videos.errors import ToolFailureError
from videos.service.config import get_ffprobe_command
from videos.service.constants import (
    ASPECT_LANDSCAPE,
    ASPECT_OTHER,
    ASPECT_PORTRAIT,
    LANDSCAPE_RATIO_RANGE,
    PORTRAIT_RATIO_RANGE,
)


@dataclass
class VideoDimensions:
    """Width and height of the primary video stream"""
    width: int
    height: int


def describe_returncode(returncode):
    """
    Describe a non-zero subprocess return code for logs and errors.

    Negative codes mean the process was killed by a signal (POSIX).
    """
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = str(-returncode)
        return f"killed by signal {name}"
    return f"exit code {returncode}"


def _parse_dimension(value):
    # ffprobe emits ints, but tolerate numeric strings
    if isinstance(value, bool):
        raise ValueError(f"not a dimension: {value!r}")
    number = int(value)
    if number <= 0:
        raise ValueError(f"not a positive dimension: {value!r}")
    return number


def probe_video_dimensions(file_path, logger=None):
    """
    Read width/height of the first video stream using ffprobe.

    Args:
        file_path: Path to a local video file
        logger: Optional callable(str) for logging

    Returns:
        VideoDimensions

    Raises:
        ToolFailureError: If ffprobe fails, times out, or its output lacks a
            usable video stream
    """
    def log(message):
        if logger:
            logger(message)

    ffprobe_bin, timeout = get_ffprobe_command()
    cmd = [
        ffprobe_bin,
        '-v', 'error',
        '-select_streams', 'v:0',
        '-show_entries', 'stream=width,height',
        '-of', 'json',
        str(Path(file_path)),
    ]

    log(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise ToolFailureError(f"ffprobe not found: {ffprobe_bin}") from e
    except subprocess.TimeoutExpired as e:
        raise ToolFailureError(f"ffprobe timed out after {timeout}s") from e

    if result.returncode != 0:
        status = describe_returncode(result.returncode)
        log(f"ffprobe failed ({status}): {result.stderr}")
        raise ToolFailureError(f"ffprobe failed with {status}", stderr=result.stderr)

    try:
        data = json.loads(result.stdout)
        stream = data['streams'][0]
        dimensions = VideoDimensions(
            width=_parse_dimension(stream['width']),
            height=_parse_dimension(stream['height']),
        )
    except (json.JSONDecodeError, KeyError, IndexError, TypeError, ValueError) as e:
        raise ToolFailureError(
            f"ffprobe output has no usable video stream: {e}", stderr=result.stderr
        ) from e

    log(f"Dimensions: {dimensions.width}x{dimensions.height}")
    return dimensions


def classify_aspect_ratio(width, height):
    """
    Map a width/height pair to an aspect ratio label.

    Both range checks are inclusive at each end.

    Returns:
        str: 'landscape', 'portrait' or 'other'
    """
    ratio = width / height
    low, high = LANDSCAPE_RATIO_RANGE
    if low <= ratio <= high:
        return ASPECT_LANDSCAPE
    low, high = PORTRAIT_RATIO_RANGE
    if low <= ratio <= high:
        return ASPECT_PORTRAIT
    return ASPECT_OTHER
