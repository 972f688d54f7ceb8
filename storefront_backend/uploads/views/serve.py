# uploads/views/serve.py

"""
PUBLIC IMAGE SERVING

GET / HEAD / OPTIONS /uploads/<path>

Files are read from the resolved upload dir at request time, so images
uploaded after startup are served without a restart or rebuild.

- Content-Type from the extension
- ETag "<size hex>-<mtime ns hex>", 304 on If-None-Match
- Short public cache; CORS open for GET
- 404 {"error": "Image not found"} (never a filesystem path)
"""

from __future__ import annotations

import logging
from pathlib import Path

from django.http import FileResponse, HttpResponse, JsonResponse
from django.utils.http import http_date
from django.views import View

from uploads.exceptions import UnsafePathError
from uploads.paths import resolve_upload_dir, resolve_upload_path, runtime_environment

logger = logging.getLogger(__name__)

MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "bmp": "image/bmp",
    "ico": "image/x-icon",
    "tiff": "image/tiff",
    "tif": "image/tiff",
}
DEFAULT_MIME_TYPE = "application/octet-stream"

CACHE_CONTROL = "public, max-age=300, stale-while-revalidate=60"

PUBLIC_HEADERS = {
    "Cache-Control": CACHE_CONTROL,
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, HEAD, OPTIONS",
}

DIAGNOSTIC_SAMPLE_SIZE = 10


def mime_type_for(path: Path) -> str:
    return MIME_TYPES.get(path.suffix.lower().lstrip("."), DEFAULT_MIME_TYPE)


def make_etag(stat_result) -> str:
    return f'"{stat_result.st_size:x}-{stat_result.st_mtime_ns:x}"'


def etag_matches(header: str, etag: str) -> bool:
    if not header:
        return False
    if header.strip() == "*":
        return True
    for candidate in header.split(","):
        candidate = candidate.strip()
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == etag:
            return True
    return False


def _apply_headers(response, headers: dict):
    for header, value in headers.items():
        response[header] = value
    return response


def _not_found(file_path: str, path: Path | None = None):
    upload_dir = resolve_upload_dir()
    sample = []
    if upload_dir.is_dir():
        try:
            sample = sorted(p.name for p in upload_dir.iterdir())[:DIAGNOSTIC_SAMPLE_SIZE]
        except OSError:
            sample = []

    logger.warning(
        "Upload not found",
        extra={
            "requested": file_path,
            "resolved": str(path) if path else None,
            "upload_dir": str(upload_dir),
            "upload_dir_exists": upload_dir.is_dir(),
            "environment": runtime_environment(),
            "sample": sample,
        },
    )
    return _apply_headers(
        JsonResponse({"error": "Image not found"}, status=404),
        {"Cache-Control": "no-store"},
    )


class UploadedFileView(View):
    http_method_names = ["get", "head", "options"]

    def _locate(self, file_path: str):
        """Returns (path, stat) or (None, None) when missing/unsafe."""
        try:
            path = resolve_upload_path(file_path)
        except UnsafePathError:
            logger.warning("Rejected unsafe upload path", extra={"requested": file_path})
            return None, None

        if not path.is_file():
            return path, None
        return path, path.stat()

    def _file_headers(self, path: Path, stat_result) -> dict:
        return {
            **PUBLIC_HEADERS,
            "Content-Type": mime_type_for(path),
            "Content-Length": str(stat_result.st_size),
            "Last-Modified": http_date(stat_result.st_mtime),
            "ETag": make_etag(stat_result),
        }

    def _not_modified(self, request, stat_result):
        etag = make_etag(stat_result)
        if not etag_matches(request.headers.get("If-None-Match", ""), etag):
            return None
        response = HttpResponse(status=304)
        return _apply_headers(response, {**PUBLIC_HEADERS, "ETag": etag})

    def get(self, request, file_path):
        path, stat_result = self._locate(file_path)
        if stat_result is None:
            return _not_found(file_path, path)

        not_modified = self._not_modified(request, stat_result)
        if not_modified is not None:
            return not_modified

        response = FileResponse(open(path, "rb"), content_type=mime_type_for(path))
        return _apply_headers(response, self._file_headers(path, stat_result))

    def head(self, request, file_path):
        path, stat_result = self._locate(file_path)
        if stat_result is None:
            return _not_found(file_path, path)

        not_modified = self._not_modified(request, stat_result)
        if not_modified is not None:
            return not_modified

        response = HttpResponse(status=200)
        return _apply_headers(response, self._file_headers(path, stat_result))

    def options(self, request, *args, **kwargs):
        response = HttpResponse(status=204)
        return _apply_headers(
            response,
            {**PUBLIC_HEADERS, "Access-Control-Allow-Headers": "Content-Type", "Allow": "GET, HEAD, OPTIONS"},
        )
