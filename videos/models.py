from django.db import models
from nanoid import generate


def generate_nanoid():
    """Generate NanoID with A-Z a-z 0-9 alphabet"""
    alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
    return generate(alphabet, size=21)


class Video(models.Model):
    """Video record owned by a single user; video_url points at the current artifact"""

    # Primary key
    id = models.CharField(
        max_length=21, primary_key=True, default=generate_nanoid, editable=False
    )

    # Owning principal (the JWT subject)
    user_id = models.CharField(max_length=64, db_index=True)

    # Basic fields
    title = models.CharField(max_length=500)
    description = models.TextField(blank=True)

    # Locators
    thumbnail_url = models.URLField(max_length=2048, blank=True)
    video_url = models.URLField(max_length=2048, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.id})"

    def is_owned_by(self, user_id):
        return self.user_id == user_id

    def to_dict(self):
        """Wire representation used by the JSON API"""
        return {
            "id": self.id,
            "userID": self.user_id,
            "title": self.title,
            "description": self.description,
            "thumbnailURL": self.thumbnail_url or None,
            "videoURL": self.video_url or None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
