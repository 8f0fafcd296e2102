"""
Management command to create a video record for local development.

Optionally prints a bearer token for the owner so the upload API can be
exercised with curl.
"""
from django.core.management.base import BaseCommand

from videos.auth import make_jwt
from videos.models import Video
from videos.service.config import get_jwt_secret


class Command(BaseCommand):
    help = 'Create a video record owned by the given user'

    def add_arguments(self, parser):
        parser.add_argument('--user', type=str, required=True, help='Owner user id')
        parser.add_argument('--title', type=str, default='Untitled', help='Video title')
        parser.add_argument('--description', type=str, default='', help='Video description')
        parser.add_argument(
            '--token',
            action='store_true',
            help='Also print a bearer token for the owner'
        )

    def handle(self, *args, **options):
        video = Video.objects.create(
            user_id=options['user'],
            title=options['title'],
            description=options['description'],
        )
        self.stdout.write(self.style.SUCCESS(f"Created video {video.id}"))

        if options['token']:
            self.stdout.write(f"Token: {make_jwt(video.user_id, get_jwt_secret())}")
