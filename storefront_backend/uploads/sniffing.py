# uploads/sniffing.py

"""
SIGNATURE SNIFFING

The type of an upload is decided from its leading bytes only. The
client-declared Content-Type and the original filename are never trusted.

Signatures:
- JPEG  FF D8 FF
- PNG   89 50 4E 47 0D 0A 1A 0A
- GIF   "GIF87a" / "GIF89a"
- WEBP  "RIFF" <4 bytes size> "WEBP"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ImageKind:
    mime_type: str
    extension: str


JPEG = ImageKind("image/jpeg", "jpg")
PNG = ImageKind("image/png", "png")
GIF = ImageKind("image/gif", "gif")
WEBP = ImageKind("image/webp", "webp")

ALLOWED_KINDS = (JPEG, PNG, WEBP, GIF)
ALLOWED_MIME_TYPES = [kind.mime_type for kind in ALLOWED_KINDS]

# Bytes needed to decide; callers may pass just the head of a file.
SNIFF_LENGTH = 12

_PREFIX_SIGNATURES = (
    (b"\xff\xd8\xff", JPEG),
    (b"\x89PNG\r\n\x1a\n", PNG),
    (b"GIF87a", GIF),
    (b"GIF89a", GIF),
)


def sniff_image(data: bytes) -> Optional[ImageKind]:
    if not data:
        return None

    head = bytes(data[:SNIFF_LENGTH])

    for signature, kind in _PREFIX_SIGNATURES:
        if head.startswith(signature):
            return kind

    if len(head) >= 12 and head[:4] == b"RIFF" and head[8:12] == b"WEBP":
        return WEBP

    return None
