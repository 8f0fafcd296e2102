"""
URL configuration for tubely project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/stable/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path

from videos.views import upload_video_view, video_detail_view

admin.site.site_header = 'Tubely Administration'
admin.site.site_title = 'Tubely site admin'


urlpatterns = [
    path('admin/', admin.site.urls),
    # Public API
    path('api/video_upload/<str:video_id>', upload_video_view, name='upload_video'),
    path('api/videos/<str:video_id>', video_detail_view, name='video_detail'),
]
