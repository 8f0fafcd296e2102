"""
Test doubles for the external tools.

FakeTools stands in for subprocess.run and answers ffprobe and ffmpeg calls
the way the real binaries would for a valid MP4.
"""
import json
import subprocess
from pathlib import Path


def completed(cmd, returncode=0, stdout='', stderr=''):
    return subprocess.CompletedProcess(args=cmd, returncode=returncode, stdout=stdout, stderr=stderr)


def ffprobe_output(width, height):
    return json.dumps({'programs': [], 'streams': [{'width': width, 'height': height}]})


class FakeTools:
    """Callable replacement for subprocess.run"""

    def __init__(self, width=1920, height=1080, probe_returncode=0, ffmpeg_returncode=0,
                 probe_stdout=None):
        self.width = width
        self.height = height
        self.probe_returncode = probe_returncode
        self.ffmpeg_returncode = ffmpeg_returncode
        self.probe_stdout = probe_stdout
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        if 'ffprobe' in cmd[0]:
            if self.probe_returncode != 0:
                return completed(cmd, self.probe_returncode, '', 'Invalid data found when processing input')
            stdout = self.probe_stdout
            if stdout is None:
                stdout = ffprobe_output(self.width, self.height)
            return completed(cmd, 0, stdout, '')

        if self.ffmpeg_returncode != 0:
            return completed(cmd, self.ffmpeg_returncode, None, 'moov atom not found')
        # Stream copy: output has the same bytes as the input
        input_path = Path(cmd[cmd.index('-i') + 1])
        Path(cmd[-1]).write_bytes(input_path.read_bytes())
        return completed(cmd, 0, None, '')

    def commands(self, tool):
        return [c for c in self.calls if tool in c[0]]

    @property
    def staged_paths(self):
        """Paths ffprobe was asked to read (the staging files)"""
        return [Path(c[-1]) for c in self.commands('ffprobe')]
