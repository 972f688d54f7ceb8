# uploads/naming.py

"""
UPLOAD FILE NAMES

Format: {unix time in ms}-{uuid4}.{ext}
e.g.    1718035200123-2f0c6c1e-7d5b-4a1e-9a53-0c7f8e1b2d3a.webp

The timestamp keeps directory listings roughly chronological; the uuid makes
collisions practically impossible across workers.
"""

from __future__ import annotations

import re
import time
import uuid

_EXTENSION_ALIASES = {"jpeg": "jpg"}
_EXTENSION_RE = re.compile(r"^[a-z0-9]{1,10}$")


def normalize_extension(extension: str) -> str:
    ext = (extension or "").strip().lower().lstrip(".")
    ext = _EXTENSION_ALIASES.get(ext, ext)
    if not _EXTENSION_RE.match(ext):
        raise ValueError(f"Invalid file extension: {extension!r}")
    return ext


def generate_filename(extension: str) -> str:
    ext = normalize_extension(extension)
    timestamp_ms = int(time.time() * 1000)
    return f"{timestamp_ms}-{uuid.uuid4()}.{ext}"
