import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from videos.auth import get_bearer_token, validate_jwt
from videos.errors import BadRequestError, ToolFailureError, TubelyError
from videos.service.config import get_jwt_secret, get_max_upload_size
from videos.service.constants import MULTIPART_OVERHEAD
from videos.service.upload_service import UploadRequest, get_owned_video, upload_video

log = logging.getLogger(__name__)


def _error_response(error):
    """Translate a TubelyError into the JSON error envelope."""
    message = str(error)
    if error.status_code >= 500:
        log.error("%s: %s", type(error).__name__, error, exc_info=True)
        if isinstance(error, ToolFailureError):
            # Raw tool output stays in the logs
            if error.stderr:
                log.error("Tool stderr: %s", error.stderr)
            message = "Couldn't process video"
    return JsonResponse({'error': message}, status=error.status_code)


def _authenticate(request):
    token = get_bearer_token(request.headers)
    return validate_jwt(token, get_jwt_secret())


def _check_content_length(request):
    """Reject oversized bodies from the header alone, before Django parses them."""
    try:
        content_length = int(request.META.get('CONTENT_LENGTH') or 0)
    except ValueError as e:
        raise BadRequestError('Invalid Content-Length header') from e
    if content_length > get_max_upload_size() + MULTIPART_OVERHEAD:
        raise BadRequestError('File exceeds upload limit')


@csrf_exempt
@require_http_methods(['POST'])
def upload_video_view(request, video_id):
    """
    Upload the video file for an existing video record.

    Expects multipart/form-data with the MP4 in the 'video' field and a
    bearer token in the Authorization header.

    Returns:
        JSON of the updated video, or {'error': ...} with the matching status
    """
    try:
        if not video_id:
            raise BadRequestError('Invalid video ID')

        user_id = _authenticate(request)
        _check_content_length(request)
        # Resolve the record before request.FILES spools the body to disk
        video = get_owned_video(video_id, user_id)

        uploaded = request.FILES.get('video')
        if uploaded is None:
            raise BadRequestError('Data is not a file')

        video = upload_video(
            video_id,
            user_id,
            UploadRequest(
                file=uploaded,
                content_type=uploaded.content_type,
                size=uploaded.size,
            ),
            video=video,
        )
    except TubelyError as e:
        return _error_response(e)

    return JsonResponse(video.to_dict(), status=200)


@require_http_methods(['GET'])
def video_detail_view(request, video_id):
    """Return a video record to its owner."""
    try:
        user_id = _authenticate(request)
        video = get_owned_video(video_id, user_id)
    except TubelyError as e:
        return _error_response(e)

    return JsonResponse(video.to_dict())
