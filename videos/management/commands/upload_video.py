"""
Django management command for uploading a local video file.

This is a thin CLI wrapper around the upload service.
"""
import json
import mimetypes
from pathlib import Path

from django.core.files import File
from django.core.management.base import BaseCommand, CommandError

from videos.errors import TubelyError
from videos.service.upload_service import UploadRequest, upload_video


class Command(BaseCommand):
    help = 'Process a local MP4 and attach it to an existing video record'

    def add_arguments(self, parser):
        parser.add_argument(
            'video_id',
            type=str,
            help='Id of the video record'
        )
        parser.add_argument(
            'path',
            type=str,
            help='Path to the MP4 file'
        )
        parser.add_argument(
            '--user',
            type=str,
            required=True,
            help='User id to upload as (must own the video)'
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Enable verbose output'
        )
        parser.add_argument(
            '--json',
            action='store_true',
            help='Output result as JSON'
        )

    def handle(self, *args, **options):
        file_path = Path(options['path'])
        verbose = options['verbose']
        output_json = options['json']

        if not file_path.is_file():
            raise CommandError(f"File not found: {file_path}")

        content_type = mimetypes.guess_type(file_path.name)[0] or 'application/octet-stream'

        def logger(message):
            if verbose and not output_json:
                self.stdout.write(message)

        try:
            with open(file_path, 'rb') as f:
                video = upload_video(
                    options['video_id'],
                    options['user'],
                    UploadRequest(
                        file=File(f, name=file_path.name),
                        content_type=content_type,
                        size=file_path.stat().st_size,
                    ),
                    logger=logger,
                )
        except TubelyError as e:
            raise CommandError(f"{type(e).__name__}: {e}") from e

        if output_json:
            self.stdout.write(json.dumps(video.to_dict(), indent=2))
        else:
            self.stdout.write(self.style.SUCCESS(f"✓ Uploaded: {video.video_url}"))
