"""
Object storage service.

Generates storage keys and uploads processed videos to S3 (or an
S3-compatible store configured with an endpoint URL).
"""
import secrets
import threading
from pathlib import Path

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from videos.errors import UploadFailureError
from videos.service.config import get_s3_settings
from videos.service.constants import ASPECT_LABELS, VIDEO_EXTENSION

# Bytes of randomness in a storage key (hex-encoded, so twice as many characters)
KEY_RANDOM_BYTES = 32

_s3_client_instance = None
_s3_client_lock = threading.Lock()


def get_s3_client():
    """Build (once) the boto3 S3 client from settings"""
    global _s3_client_instance
    # boto3 sessions are not thread-safe while being set up
    with _s3_client_lock:
        if _s3_client_instance is None:
            cfg = get_s3_settings()
            _s3_client_instance = boto3.client(
                's3',
                region_name=cfg['region'],
                endpoint_url=cfg['endpoint_url'],
                config=BotoConfig(
                    connect_timeout=cfg['connect_timeout'],
                    read_timeout=cfg['read_timeout'],
                    retries={'total_max_attempts': 1, 'mode': 'standard'},
                ),
            )
    return _s3_client_instance


def reset_s3_client():
    """Drop the cached client (settings changed)"""
    global _s3_client_instance
    with _s3_client_lock:
        _s3_client_instance = None


def generate_object_key(aspect_ratio, extension=VIDEO_EXTENSION):
    """
    Build a storage key of the form '<aspect_ratio>/<random hex><extension>'.

    The random part comes from the secrets module.
    """
    if aspect_ratio not in ASPECT_LABELS:
        raise ValueError(f"Unknown aspect ratio label: {aspect_ratio}")
    return f"{aspect_ratio}/{secrets.token_hex(KEY_RANDOM_BYTES)}{extension}"


def build_object_url(key):
    """
    Public URL for an object key.

    Honors TUBELY_S3_PUBLIC_BASE_URL (CDN or S3-compatible host) when set,
    otherwise uses the AWS virtual-hosted form.
    """
    cfg = get_s3_settings()
    base_url = cfg['public_base_url']
    if base_url:
        return f"{base_url.rstrip('/')}/{key}"
    return f"https://{cfg['bucket']}.s3.{cfg['region']}.amazonaws.com/{key}"


def upload_file_to_bucket(file_path, key, content_type, logger=None):
    """
    Upload a local file to the configured bucket.

    Args:
        file_path: Local file to upload
        key: Object key
        content_type: Stored as the object's Content-Type
        logger: Optional callable(str) for logging

    Returns:
        str: Public URL of the uploaded object

    Raises:
        UploadFailureError: On any transport or store-side error
    """
    def log(message):
        if logger:
            logger(message)

    cfg = get_s3_settings()
    bucket = cfg['bucket']
    if not bucket:
        raise UploadFailureError('Object storage bucket is not configured')

    file_path = Path(file_path)
    log(f"Uploading {file_path} to s3://{bucket}/{key}")

    try:
        client = get_s3_client()
        client.upload_file(
            str(file_path),
            bucket,
            key,
            ExtraArgs={'ContentType': content_type},
        )
    except (BotoCoreError, ClientError, S3UploadFailedError, OSError) as e:
        log(f"Upload failed: {e}")
        raise UploadFailureError("Couldn't upload video to object storage") from e

    url = build_object_url(key)
    log(f"Uploaded: {url}")
    return url
