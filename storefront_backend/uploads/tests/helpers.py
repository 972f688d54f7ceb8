# uploads/tests/helpers.py

from __future__ import annotations

import tempfile
from pathlib import Path

from django.test import override_settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 24
GIF_BYTES = b"GIF89a" + b"\x00" * 24
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 16


class TempContentDirMixin:
    """Points CONTENT_DIR at a fresh temp dir for each test."""

    def setUp(self):
        super().setUp()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.content_dir = Path(tmp.name)
        self.upload_dir = self.content_dir / "uploads"

        override = override_settings(
            CONTENT_DIR=str(self.content_dir),
            CONTENT_DIR_HOST="",
            DOCKER_ENV=False,
        )
        override.enable()
        self.addCleanup(override.disable)

    def write_upload(self, name: str, data: bytes = PNG_BYTES) -> Path:
        path = self.upload_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path
