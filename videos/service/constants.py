"""
Media constants.

Centralized definitions of accepted types and aspect ratio labels.
"""

# The only container accepted for upload
SUPPORTED_MEDIA_TYPE = 'video/mp4'
VIDEO_EXTENSION = '.mp4'

# Aspect ratio labels (also the first segment of storage keys)
ASPECT_LANDSCAPE = 'landscape'
ASPECT_PORTRAIT = 'portrait'
ASPECT_OTHER = 'other'

ASPECT_LABELS = [ASPECT_LANDSCAPE, ASPECT_PORTRAIT, ASPECT_OTHER]

# Inclusive width/height ranges: 16:9 is ~1.78, 9:16 is ~0.56
LANDSCAPE_RATIO_RANGE = (1.70, 1.80)
PORTRAIT_RATIO_RANGE = (0.50, 0.60)

# Suffix appended to the staging path for the fast-start output
PROCESSED_SUFFIX = '.processed'

# Prefix of per-run scratch directories (tmp-<video_id>-<random>)
STAGING_DIR_PREFIX = 'tmp-'

# Allowance for multipart boundaries/headers when pre-checking Content-Length
MULTIPART_OVERHEAD = 1 << 20
