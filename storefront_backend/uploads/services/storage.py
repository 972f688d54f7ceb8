# uploads/services/storage.py

"""
UPLOAD STORAGE SERVICE

save_upload():
1. size checks (empty / > UPLOAD_MAX_BYTES)
2. signature sniffing (JPEG, PNG, WEBP, GIF only)
3. ensure upload dir
4. write under a generated name, extension from the sniffed type
5. return public URL /uploads/<name>

The client filename is only logged, never used on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from django.conf import settings

from uploads.exceptions import (
    UploadDirectoryError,
    UploadNotFoundError,
    UploadValidationError,
)
from uploads.naming import generate_filename
from uploads.paths import ensure_upload_dir, resolve_upload_dir, resolve_upload_file
from uploads.sniffing import sniff_image

logger = logging.getLogger(__name__)


@dataclass
class StoredUpload:
    file_name: str
    url: str
    size: int
    mime_type: str


@dataclass
class UploadedFile:
    name: str
    url: str
    size: int
    modified: datetime


def public_url(file_name: str) -> str:
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{file_name}"


def max_size_label() -> str:
    return f"{settings.UPLOAD_MAX_BYTES // (1024 * 1024)}MB"


def validate_upload(data: bytes):
    size = len(data or b"")
    if size == 0:
        raise UploadValidationError("Empty file")

    if size > settings.UPLOAD_MAX_BYTES:
        raise UploadValidationError(
            f"File too large. Maximum size is {max_size_label()}"
        )

    kind = sniff_image(data)
    if kind is None:
        raise UploadValidationError(
            "Invalid file type. Only JPEG, PNG, WebP and GIF are allowed"
        )
    return kind


def save_upload(data: bytes, original_name: Optional[str] = None) -> StoredUpload:
    kind = validate_upload(data)
    upload_dir = ensure_upload_dir()

    file_name = generate_filename(kind.extension)
    target = upload_dir / file_name

    try:
        # "xb": never overwrite, even on the (theoretical) name collision
        with open(target, "xb") as fh:
            fh.write(data)
    except OSError as exc:
        logger.error(
            "Failed to write upload",
            extra={"path": str(target), "error": str(exc)},
        )
        raise UploadDirectoryError(f"Failed to write {target}") from exc

    logger.info(
        "Upload stored",
        extra={
            "file_name": file_name,
            "original_name": original_name,
            "size": len(data),
            "mime_type": kind.mime_type,
            "upload_dir": str(upload_dir),
        },
    )

    return StoredUpload(
        file_name=file_name,
        url=public_url(file_name),
        size=len(data),
        mime_type=kind.mime_type,
    )


def list_uploads() -> list[UploadedFile]:
    upload_dir = resolve_upload_dir()
    if not upload_dir.is_dir():
        logger.info("Upload directory missing; nothing to list", extra={"upload_dir": str(upload_dir)})
        return []

    files = []
    for entry in upload_dir.iterdir():
        if not entry.is_file() or entry.name.startswith("."):
            continue
        stat = entry.stat()
        files.append(
            UploadedFile(
                name=entry.name,
                url=public_url(entry.name),
                size=stat.st_size,
                modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            )
        )

    files.sort(key=lambda f: (f.modified, f.name), reverse=True)
    return files


def delete_upload(file_name: str) -> None:
    path = resolve_upload_file(file_name)

    if not path.is_file():
        raise UploadNotFoundError(f"File not found: {file_name}")

    try:
        path.unlink()
    except FileNotFoundError as exc:
        raise UploadNotFoundError(f"File not found: {file_name}") from exc
    except OSError as exc:
        logger.error("Failed to delete upload", extra={"path": str(path), "error": str(exc)})
        raise UploadDirectoryError(f"Failed to delete {file_name}") from exc

    logger.info("Upload deleted", extra={"file_name": file_name})
