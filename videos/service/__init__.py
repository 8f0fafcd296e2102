"""
Service layer for video processing.

This module contains the upload pipeline and its adapters (ffprobe, ffmpeg,
object storage), usable without going through HTTP. These functions are used by:
- The upload API view (videos/views.py)
- The CLI management command (management/commands/upload_video.py)
"""
