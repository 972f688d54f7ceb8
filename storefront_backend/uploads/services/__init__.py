# uploads/services/__init__.py

from .storage import (
    StoredUpload,
    UploadedFile,
    delete_upload,
    list_uploads,
    max_size_label,
    public_url,
    save_upload,
    validate_upload,
)

__all__ = [
    "StoredUpload",
    "UploadedFile",
    "delete_upload",
    "list_uploads",
    "max_size_label",
    "public_url",
    "save_upload",
    "validate_upload",
]
