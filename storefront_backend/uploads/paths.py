# uploads/paths.py

"""
CONTENT DIRECTORY RESOLUTION

Uploads live in <content dir>/uploads. The content dir depends on where the
app runs:

1. CONTENT_DIR_HOST   host path of the mounted volume (dev outside Docker)
2. CONTENT_DIR        explicit path (any environment)
3. DOCKER_ENV=true    /app/CONTENT (compose volume mount point)
4. NODE_ENV=production first existing of CONTENT_DIR_PRODUCTION_FALLBACKS,
                       else the first entry
5. otherwise          <project>/CONTENT

CONTENT_DIR_HOST is ignored inside Docker: the host path does not exist in
the container.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Union

from django.conf import settings

from uploads.exceptions import UnsafePathError, UploadDirectoryError

logger = logging.getLogger(__name__)

UPLOADS_SUBDIR = "uploads"


def runtime_environment() -> str:
    if settings.DOCKER_ENV:
        return "docker"
    if settings.NODE_ENV == "production":
        return "production"
    return "development"


def resolve_content_dir() -> Path:
    host_dir = (settings.CONTENT_DIR_HOST or "").strip()
    if host_dir and not settings.DOCKER_ENV:
        return Path(host_dir)

    explicit = (settings.CONTENT_DIR or "").strip()
    if explicit:
        return Path(explicit)

    environment = runtime_environment()

    if environment == "docker":
        return Path(settings.CONTENT_DIR_DOCKER)

    if environment == "production":
        fallbacks = [Path(p) for p in settings.CONTENT_DIR_PRODUCTION_FALLBACKS]
        for candidate in fallbacks:
            if candidate.is_dir():
                return candidate
        logger.warning(
            "No production content directory exists yet; using first fallback",
            extra={"candidates": [str(p) for p in fallbacks]},
        )
        return fallbacks[0]

    return Path(settings.CONTENT_DIR_DEV)


def resolve_upload_dir() -> Path:
    return resolve_content_dir() / UPLOADS_SUBDIR


def ensure_upload_dir() -> Path:
    upload_dir = resolve_upload_dir()
    existed = upload_dir.is_dir()

    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error(
            "Cannot create upload directory",
            extra={
                "upload_dir": str(upload_dir),
                "environment": runtime_environment(),
                "error": str(exc),
            },
        )
        raise UploadDirectoryError(f"Cannot create upload directory {upload_dir}") from exc

    if not os.access(upload_dir, os.W_OK):
        logger.error(
            "Upload directory is not writable",
            extra={"upload_dir": str(upload_dir), "uid": os.getuid()},
        )
        raise UploadDirectoryError(f"Upload directory {upload_dir} is not writable")

    if not existed:
        logger.info(
            "Upload directory created",
            extra={"upload_dir": str(upload_dir), "environment": runtime_environment()},
        )
    return upload_dir


def _check_segment(segment: str) -> None:
    if segment == ".." or "\x00" in segment or "\\" in segment or "/" in segment:
        raise UnsafePathError(f"Unsafe path segment: {segment!r}")


def resolve_upload_path(segments: Union[str, Iterable[str]]) -> Path:
    """
    Join nested segments under the upload dir; reject anything escaping it.
    Accepts "a/b/c.jpg" or ["a", "b", "c.jpg"].
    """
    if isinstance(segments, str):
        segments = segments.split("/")

    parts = [s for s in segments if s not in ("", ".")]
    if not parts:
        raise UnsafePathError("Empty upload path")

    for part in parts:
        _check_segment(part)

    root = resolve_upload_dir().resolve()
    candidate = root.joinpath(*parts).resolve()

    if candidate == root or root not in candidate.parents:
        raise UnsafePathError("Path escapes the upload directory")

    return candidate


def resolve_upload_file(file_name: str) -> Path:
    """A single file directly in the upload dir (DELETE uses this)."""
    name = (file_name or "").strip()
    if not name or "/" in name:
        raise UnsafePathError(f"Invalid file name: {file_name!r}")
    return resolve_upload_path([name])
