"""
Tests for service/process.py
"""
import subprocess
import tempfile
from pathlib import Path
from unittest.mock import patch

from django.test import SimpleTestCase, override_settings

from videos.errors import ToolFailureError
from videos.service.media_info import classify_aspect_ratio, probe_video_dimensions
from videos.service.process import (
    ProcessedFileInfo,
    get_processed_path,
    process_video_for_fast_start,
)
from videos.test_service.fakes import FakeTools, completed


@override_settings(TUBELY_FFMPEG_BIN='ffmpeg', TUBELY_FFMPEG_TIMEOUT=60)
class ProcessServiceTest(SimpleTestCase):
    """Tests for the fast start rewrite"""

    def test_processed_path_appends_suffix(self):
        self.assertEqual(
            get_processed_path('/tmp/run/v1.mp4'),
            Path('/tmp/run/v1.mp4.processed'),
        )

    @patch('videos.service.process.subprocess.run')
    def test_fast_start_success(self, mock_run):
        """ffmpeg is called with stream copy + faststart and the output is reported"""
        mock_run.side_effect = FakeTools()

        with tempfile.TemporaryDirectory() as temp_dir:
            input_file = Path(temp_dir) / 'v1.mp4'
            input_file.write_bytes(b'fake mp4 data')

            result = process_video_for_fast_start(input_file)

            self.assertIsInstance(result, ProcessedFileInfo)
            self.assertEqual(result.path, Path(temp_dir) / 'v1.mp4.processed')
            self.assertEqual(result.file_size, len(b'fake mp4 data'))
            self.assertTrue(result.path.exists())

        cmd = mock_run.call_args[0][0]
        self.assertEqual(cmd[0], 'ffmpeg')
        self.assertEqual(cmd[cmd.index('-i') + 1], str(input_file))
        self.assertEqual(cmd[cmd.index('-movflags') + 1], 'faststart')
        self.assertEqual(cmd[cmd.index('-map_metadata') + 1], '0')
        self.assertEqual(cmd[cmd.index('-codec') + 1], 'copy')
        self.assertEqual(cmd[cmd.index('-f') + 1], 'mp4')
        self.assertEqual(cmd[-1], str(input_file) + '.processed')

        kwargs = mock_run.call_args[1]
        self.assertEqual(kwargs['stdout'], subprocess.DEVNULL)
        self.assertEqual(kwargs['stderr'], subprocess.PIPE)
        self.assertEqual(kwargs['timeout'], 60)

    @patch('videos.service.process.subprocess.run')
    def test_fast_start_failure_carries_stderr(self, mock_run):
        mock_run.side_effect = FakeTools(ffmpeg_returncode=1)

        with tempfile.TemporaryDirectory() as temp_dir:
            input_file = Path(temp_dir) / 'v1.mp4'
            input_file.write_bytes(b'broken')

            with self.assertRaises(ToolFailureError) as ctx:
                process_video_for_fast_start(input_file)

        self.assertIn('ffmpeg failed with exit code 1', str(ctx.exception))
        self.assertEqual(ctx.exception.stderr, 'moov atom not found')

    @patch('videos.service.process.subprocess.run')
    def test_fast_start_killed_by_signal(self, mock_run):
        mock_run.return_value = completed(['ffmpeg'], -9, None, '')

        with self.assertRaises(ToolFailureError) as ctx:
            process_video_for_fast_start('/tmp/v1.mp4')

        self.assertIn('SIGKILL', str(ctx.exception))

    @patch('videos.service.process.subprocess.run')
    def test_fast_start_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=['ffmpeg'], timeout=60)

        with self.assertRaises(ToolFailureError) as ctx:
            process_video_for_fast_start('/tmp/v1.mp4')

        self.assertIn('timed out', str(ctx.exception))

    @patch('videos.service.process.subprocess.run')
    def test_fast_start_missing_output(self, mock_run):
        """Exit 0 without an output file is still a failure"""
        mock_run.return_value = completed(['ffmpeg'], 0, None, '')

        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(ToolFailureError):
                process_video_for_fast_start(Path(temp_dir) / 'v1.mp4')

    @patch('videos.service.process.subprocess.run')
    def test_remux_keeps_classification(self, mock_run):
        """Stream copy leaves dimensions alone, so the label survives the rewrite"""
        tools = FakeTools(width=1080, height=1920)
        mock_run.side_effect = tools

        with tempfile.TemporaryDirectory() as temp_dir:
            input_file = Path(temp_dir) / 'v1.mp4'
            input_file.write_bytes(b'portrait video')

            before = probe_video_dimensions(input_file)
            processed = process_video_for_fast_start(input_file)
            after = probe_video_dimensions(processed.path)

        self.assertEqual(
            classify_aspect_ratio(before.width, before.height),
            classify_aspect_ratio(after.width, after.height),
        )
        self.assertEqual(tools.staged_paths[-1], processed.path)
