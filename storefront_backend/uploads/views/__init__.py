# uploads/views/__init__.py

from .serve import UploadedFileView
from .upload import UploadView

__all__ = ["UploadView", "UploadedFileView"]
