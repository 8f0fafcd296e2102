"""
Configuration adapter for video processing settings.

Centralizes access to Django settings, ensuring consistent configuration
across the web view and the management commands.
"""

from pathlib import Path

from django.conf import settings


def get_scratch_dir():
    """Get the directory holding per-run staging directories (created on demand)"""
    scratch_dir = Path(settings.TUBELY_SCRATCH_DIR)
    scratch_dir.mkdir(parents=True, exist_ok=True)
    return scratch_dir


def get_max_upload_size():
    """Upload ceiling in bytes"""
    return settings.TUBELY_MAX_UPLOAD_SIZE


def get_jwt_secret():
    return settings.TUBELY_JWT_SECRET


def get_ffprobe_command():
    """
    Get ffprobe binary and timeout.

    Returns:
        tuple[str, int]: (binary, timeout_seconds)
    """
    return settings.TUBELY_FFPROBE_BIN, settings.TUBELY_FFPROBE_TIMEOUT


def get_ffmpeg_command():
    """
    Get ffmpeg binary and timeout.

    Returns:
        tuple[str, int]: (binary, timeout_seconds)
    """
    return settings.TUBELY_FFMPEG_BIN, settings.TUBELY_FFMPEG_TIMEOUT


def get_s3_settings():
    """
    Get object store settings.

    Returns:
        dict with keys: bucket, region, endpoint_url, public_base_url,
        connect_timeout, read_timeout
    """
    return {
        'bucket': settings.TUBELY_S3_BUCKET,
        'region': settings.TUBELY_S3_REGION,
        'endpoint_url': settings.TUBELY_S3_ENDPOINT_URL,
        'public_base_url': settings.TUBELY_S3_PUBLIC_BASE_URL,
        'connect_timeout': settings.TUBELY_S3_CONNECT_TIMEOUT,
        'read_timeout': settings.TUBELY_S3_READ_TIMEOUT,
    }
