from django.contrib import admin
from django.utils.html import format_html

from videos.models import Video


@admin.register(Video)
class VideoAdmin(admin.ModelAdmin):
    list_display = ['title', 'id', 'user_id', 'aspect_ratio', 'video_link', 'updated_at']
    list_filter = ['created_at']
    search_fields = ['title', 'id', 'user_id']
    readonly_fields = ['id', 'video_url', 'created_at', 'updated_at']

    @admin.display(description='Aspect')
    def aspect_ratio(self, obj):
        # Keys are <aspect>/<hex>.mp4, so the first path segment after the host is the label
        if not obj.video_url:
            return '-'
        parts = obj.video_url.rstrip('/').split('/')
        return parts[-2] if len(parts) >= 2 else '-'

    @admin.display(description='Video')
    def video_link(self, obj):
        if not obj.video_url:
            return '-'
        return format_html('<a href="{}" target="_blank">open</a>', obj.video_url)
