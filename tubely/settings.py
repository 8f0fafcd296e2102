"""
Django settings for the tubely project.

Everything deployment-specific comes from the environment (optionally via a
.env file next to manage.py). Project settings use the TUBELY_ prefix and are
read through videos.service.config.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-dev-key-change-me')

DEBUG = os.getenv('DJANGO_DEBUG', 'True').lower() in ('true', '1', 't')

ALLOWED_HOSTS = [h.strip() for h in os.getenv('DJANGO_ALLOWED_HOSTS', '*').split(',') if h.strip()]


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'videos',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'tubely.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'tubely.wsgi.application'


# Database

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.getenv('TUBELY_DB_PATH', str(BASE_DIR / 'db.sqlite3')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Internationalization

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True


# Static files (admin only)

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# Uploads
# Large request bodies are spooled to disk by Django before the view runs.

TUBELY_SCRATCH_DIR = os.getenv('TUBELY_SCRATCH_DIR', str(BASE_DIR / 'tmp'))
FILE_UPLOAD_TEMP_DIR = os.getenv('DJANGO_FILE_UPLOAD_TEMP_DIR') or None

# Upload ceiling for a single video (1 GiB)
TUBELY_MAX_UPLOAD_SIZE = 1 << 30


# Authentication

TUBELY_JWT_SECRET = os.getenv('TUBELY_JWT_SECRET', 'tubely-insecure-dev-secret-change-me')


# Object storage (S3 or S3-compatible)

TUBELY_S3_BUCKET = os.getenv('TUBELY_S3_BUCKET', '')
TUBELY_S3_REGION = os.getenv('TUBELY_S3_REGION', 'us-east-1')
TUBELY_S3_ENDPOINT_URL = os.getenv('TUBELY_S3_ENDPOINT_URL') or None
# When set, public URLs are built as <base>/<key> instead of the AWS virtual-host form
TUBELY_S3_PUBLIC_BASE_URL = os.getenv('TUBELY_S3_PUBLIC_BASE_URL', '')
TUBELY_S3_CONNECT_TIMEOUT = int(os.getenv('TUBELY_S3_CONNECT_TIMEOUT', '10'))
TUBELY_S3_READ_TIMEOUT = int(os.getenv('TUBELY_S3_READ_TIMEOUT', '60'))


# External tools

TUBELY_FFPROBE_BIN = os.getenv('TUBELY_FFPROBE_BIN', 'ffprobe')
TUBELY_FFMPEG_BIN = os.getenv('TUBELY_FFMPEG_BIN', 'ffmpeg')
TUBELY_FFPROBE_TIMEOUT = int(os.getenv('TUBELY_FFPROBE_TIMEOUT', '30'))
TUBELY_FFMPEG_TIMEOUT = int(os.getenv('TUBELY_FFMPEG_TIMEOUT', '600'))


# Logging

TUBELY_LOG_LEVEL = os.getenv('TUBELY_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'videos': {
            'handlers': ['console'],
            'level': TUBELY_LOG_LEVEL,
            'propagate': False,
        },
    },
}
