# uploads/apps.py

"""
UPLOADS APP CONFIG

Local filesystem image uploads:
- POST/GET/DELETE /api/upload
- GET/HEAD/OPTIONS /uploads/<path>
"""

from django.apps import AppConfig


class UploadsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "uploads"
    verbose_name = "Image Uploads"
