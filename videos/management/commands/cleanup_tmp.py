"""
Management command to clean up abandoned staging directories.

Uploads are staged in tmp-<video_id>-<random> directories under the scratch
dir and removed when the run ends. A worker that is killed mid-run leaves its
directory behind; this command finds and removes those.
"""
from datetime import datetime, timedelta, timezone
import shutil

from django.core.management.base import BaseCommand

from videos.models import Video
from videos.service.config import get_scratch_dir
from videos.service.constants import STAGING_DIR_PREFIX


def _plural(count):
    return 'ies' if count != 1 else 'y'


class Command(BaseCommand):
    help = 'Clean up abandoned tmp-<video_id>-* staging directories'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without actually deleting'
        )
        parser.add_argument(
            '--force',
            action='store_true',
            help='Delete tmp directories without confirmation'
        )
        parser.add_argument(
            '--max-age',
            type=int,
            default=60,
            help='Maximum age in minutes before considering tmp directory abandoned (default: 60)'
        )

    def handle(self, *args, **options):
        """Find and clean up abandoned tmp directories"""
        dry_run = options['dry_run']
        force = options['force']
        max_age_minutes = options['max_age']

        scratch_dir = get_scratch_dir()
        tmp_dirs = [d for d in scratch_dir.glob(f'{STAGING_DIR_PREFIX}*') if d.is_dir()]

        if not tmp_dirs:
            self.stdout.write(self.style.SUCCESS("No tmp directories found"))
            return

        # Filter by age
        now = datetime.now(timezone.utc)
        max_age = timedelta(minutes=max_age_minutes)
        old_tmp_dirs = []

        for tmp_dir in tmp_dirs:
            mtime = datetime.fromtimestamp(tmp_dir.stat().st_mtime, tz=timezone.utc)
            dir_age = now - mtime
            if dir_age <= max_age:
                continue

            # tmp-{video_id}-{random}
            video_id = tmp_dir.name[len(STAGING_DIR_PREFIX):].rsplit('-', 1)[0]
            if Video.objects.filter(pk=video_id).exists():
                status_info = f"DB: video {video_id}"
            else:
                status_info = "DB: No record"

            old_tmp_dirs.append({
                'path': tmp_dir,
                'age': dir_age,
                'status_info': status_info,
            })

        if not old_tmp_dirs:
            self.stdout.write(self.style.SUCCESS(
                f"Found {len(tmp_dirs)} tmp director{_plural(len(tmp_dirs))}, "
                f"but none are older than {max_age_minutes} minutes"
            ))
            return

        # Display findings
        self.stdout.write(f"\nFound {len(old_tmp_dirs)} abandoned tmp director{_plural(len(old_tmp_dirs))}:")
        self.stdout.write(f"{'=' * 80}")

        total_size = 0
        for info in old_tmp_dirs:
            dir_size = sum(f.stat().st_size for f in info['path'].rglob('*') if f.is_file())
            total_size += dir_size

            age_str = str(info['age']).split('.')[0]  # Remove microseconds
            size_mb = dir_size / (1024 * 1024)

            self.stdout.write(
                f"\n{info['path'].name:50} | Age: {age_str:15} | Size: {size_mb:8.1f} MB"
            )
            self.stdout.write(f"        {info['status_info']}")

        self.stdout.write(f"\n{'=' * 80}")
        self.stdout.write(f"Total size: {total_size / (1024 * 1024):.1f} MB\n")

        if dry_run:
            self.stdout.write(self.style.WARNING(
                f"\nDRY RUN: Would delete {len(old_tmp_dirs)} director{_plural(len(old_tmp_dirs))}"
            ))
            self.stdout.write("Run without --dry-run to actually delete")
            return

        if not force:
            response = input(f"\nDelete these {len(old_tmp_dirs)} director{_plural(len(old_tmp_dirs))}? [y/N]: ")
            if response.lower() != 'y':
                self.stdout.write("Cancelled")
                return

        deleted_count = 0
        for info in old_tmp_dirs:
            try:
                shutil.rmtree(info['path'])
                self.stdout.write(self.style.SUCCESS(f"✓ Deleted: {info['path'].name}"))
                deleted_count += 1
            except OSError as e:
                self.stdout.write(self.style.ERROR(f"✗ Failed to delete {info['path'].name}: {e}"))

        self.stdout.write(self.style.SUCCESS(
            f"\n✓ Deleted {deleted_count} of {len(old_tmp_dirs)} tmp director{_plural(deleted_count)}"
        ))
