# uploads/tests/test_sniffing.py

from __future__ import annotations

from django.test import SimpleTestCase

from uploads.sniffing import GIF, JPEG, PNG, WEBP, sniff_image

from .helpers import GIF_BYTES, JPEG_BYTES, PNG_BYTES, WEBP_BYTES


class SniffImageTests(SimpleTestCase):
    """
    GUARANTEES:
    - Only JPEG, PNG, GIF and WEBP signatures are recognized
    - Declared names/types play no part
    """

    def test_known_signatures(self):
        self.assertEqual(sniff_image(JPEG_BYTES), JPEG)
        self.assertEqual(sniff_image(PNG_BYTES), PNG)
        self.assertEqual(sniff_image(GIF_BYTES), GIF)
        self.assertEqual(sniff_image(b"GIF87a" + b"\x00" * 6), GIF)
        self.assertEqual(sniff_image(WEBP_BYTES), WEBP)

    def test_riff_that_is_not_webp(self):
        self.assertIsNone(sniff_image(b"RIFF\x24\x00\x00\x00WAVEfmt "))

    def test_truncated_webp_header(self):
        self.assertIsNone(sniff_image(b"RIFF\x24\x00"))

    def test_rejects_other_content(self):
        self.assertIsNone(sniff_image(b""))
        self.assertIsNone(sniff_image(b"<?php echo 1; ?>"))
        self.assertIsNone(sniff_image(b"<svg xmlns='http://www.w3.org/2000/svg'/>"))
        self.assertIsNone(sniff_image(b"%PDF-1.7"))

    def test_mime_and_extension(self):
        self.assertEqual((JPEG.mime_type, JPEG.extension), ("image/jpeg", "jpg"))
        self.assertEqual((WEBP.mime_type, WEBP.extension), ("image/webp", "webp"))
