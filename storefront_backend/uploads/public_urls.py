# uploads/public_urls.py

"""
Mounted at the site root: /uploads/<path> serves stored images.
"""

from django.urls import re_path

from .views import UploadedFileView

urlpatterns = [
    re_path(r"^(?P<file_path>.+)$", UploadedFileView.as_view(), name="uploaded-file"),
]
