"""
Main video upload entrypoint.

Provides a single function that takes an uploaded MP4 from the request to
object storage, used by both the API view and the CLI.
"""
import logging
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from django.db import DatabaseError

from videos.errors import BadRequestError, NotFoundError, PersistenceError, UserForbiddenError
from videos.models import Video
from videos.service.config import get_max_upload_size, get_scratch_dir
from videos.service.constants import STAGING_DIR_PREFIX, SUPPORTED_MEDIA_TYPE, VIDEO_EXTENSION
from videos.service.media_info import classify_aspect_ratio, probe_video_dimensions
from videos.service.process import get_processed_path, process_video_for_fast_start
from videos.service.storage import generate_object_key, upload_file_to_bucket

log = logging.getLogger(__name__)


@dataclass
class UploadRequest:
    """An uploaded file plus what the client declared about it"""
    file: Any  # anything with chunks(), e.g. UploadedFile or django.core.files.File
    content_type: str
    size: Optional[int] = None


@dataclass
class StagingPaths:
    """Per-run scratch locations"""
    directory: Path
    staging: Path
    processed: Path


@contextmanager
def staging_area(video_id, scratch_dir=None):
    """
    Create a private scratch directory for one upload run.

    The directory is named tmp-<video_id>-<random>, so concurrent runs for the
    same video never share paths. It is removed with everything in it when
    the block exits, whatever the outcome.

    Yields:
        StagingPaths
    """
    scratch_dir = Path(scratch_dir) if scratch_dir else get_scratch_dir()
    directory = Path(tempfile.mkdtemp(prefix=f"{STAGING_DIR_PREFIX}{video_id}-", dir=scratch_dir))
    staging = directory / f"{video_id}{VIDEO_EXTENSION}"
    paths = StagingPaths(
        directory=directory,
        staging=staging,
        processed=get_processed_path(staging),
    )
    try:
        yield paths
    finally:
        try:
            shutil.rmtree(directory)
        except FileNotFoundError:
            pass
        except OSError as cleanup_error:
            log.warning("Failed to clean up %s: %s", directory, cleanup_error)


def check_upload_size(size):
    """Reject uploads whose declared size is over the ceiling"""
    max_size = get_max_upload_size()
    if size is not None and size > max_size:
        raise BadRequestError(f"File exceeds upload limit ({max_size} bytes)")


def check_media_type(content_type):
    if content_type != SUPPORTED_MEDIA_TYPE:
        raise BadRequestError(f"Unsupported media type, expected {SUPPORTED_MEDIA_TYPE}")


def get_owned_video(video_id, user_id):
    """
    Load a video and check that user_id owns it.

    Raises:
        NotFoundError, UserForbiddenError, PersistenceError
    """
    try:
        video = Video.objects.filter(pk=video_id).first()
    except DatabaseError as e:
        raise PersistenceError("Couldn't load video") from e

    if video is None:
        raise NotFoundError("Couldn't find video")
    if not video.is_owned_by(user_id):
        raise UserForbiddenError("Not authorized to update this video")
    return video


def save_video_url(video, url):
    video.video_url = url
    try:
        video.save(update_fields=['video_url', 'updated_at'])
    except DatabaseError as e:
        raise PersistenceError("Couldn't update video") from e
    return video


def write_upload(upload, destination):
    """
    Stream upload chunks to destination.

    Enforces the size ceiling while writing, for uploads that did not
    declare a size.

    Returns:
        int: Bytes written
    """
    max_size = get_max_upload_size()
    written = 0
    with open(destination, 'wb') as f:
        for chunk in upload.file.chunks():
            written += len(chunk)
            if written > max_size:
                raise BadRequestError(f"File exceeds upload limit ({max_size} bytes)")
            f.write(chunk)
    return written


def upload_video(video_id, user_id, upload, logger=None, video=None):
    """
    Process an uploaded MP4 and attach it to a video.

    This is the main entrypoint for the upload service. It handles:
    - Size, type and ownership checks (before anything touches disk)
    - Staging the upload in a per-run scratch directory
    - Aspect ratio detection (ffprobe)
    - Fast start rewrite (ffmpeg)
    - Upload to object storage under '<aspect>/<random>.mp4'
    - Updating the video's URL

    The scratch directory is always removed before this returns or raises,
    and the video is only updated after the upload has succeeded.

    Args:
        video_id: Id of the Video to attach the upload to
        user_id: Authenticated user making the request
        upload: UploadRequest
        logger: Optional callable(str) for logging (default: module logger)
        video: Video already loaded through get_owned_video, so the lookup is
            not repeated. Ownership is still checked against user_id.

    Returns:
        Video: The updated video

    Raises:
        TubelyError subclasses (see videos.errors)
    """
    logger = logger or log.info

    check_upload_size(upload.size)
    check_media_type(upload.content_type)
    if video is None or video.pk != video_id:
        video = get_owned_video(video_id, user_id)
    elif not video.is_owned_by(user_id):
        raise UserForbiddenError("Not authorized to update this video")

    logger(f"Uploading video {video_id} for user {user_id}")

    with staging_area(video_id) as paths:
        written = write_upload(upload, paths.staging)
        logger(f"Staged {written} bytes at {paths.staging}")

        dimensions = probe_video_dimensions(paths.staging, logger=logger)
        aspect_ratio = classify_aspect_ratio(dimensions.width, dimensions.height)
        logger(f"Aspect ratio: {aspect_ratio}")

        processed = process_video_for_fast_start(paths.staging, logger=logger)

        key = generate_object_key(aspect_ratio)
        url = upload_file_to_bucket(processed.path, key, upload.content_type, logger=logger)

        save_video_url(video, url)

    logger(f"Video upload complete: {video.video_url}")
    return video
