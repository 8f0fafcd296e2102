"""
Error taxonomy for the video API.

Every error carries the HTTP status the views respond with.
"""


class TubelyError(Exception):
    """Base error type."""

    status_code = 500


class BadRequestError(TubelyError):
    """Malformed request, oversized upload or unsupported media type."""

    status_code = 400


class UnauthorizedError(TubelyError):
    """Missing or invalid bearer credential."""

    status_code = 401


class UserForbiddenError(TubelyError):
    """Authenticated user does not own the record."""

    status_code = 403


class NotFoundError(TubelyError):
    """Record does not exist."""

    status_code = 404


class ToolFailureError(TubelyError):
    """ffprobe/ffmpeg failed. stderr is kept for logging, not for the client."""

    status_code = 500

    def __init__(self, message, stderr=''):
        super().__init__(message)
        self.stderr = stderr or ''


class UploadFailureError(TubelyError):
    """Object store rejected or could not complete the write."""

    status_code = 502


class PersistenceError(TubelyError):
    """Database failure while reading or updating a record."""

    status_code = 500
