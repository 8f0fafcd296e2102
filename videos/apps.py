from django.apps import AppConfig


class VideosConfig(AppConfig):
    name = 'videos'
    default_auto_field = 'django.db.models.BigAutoField'
