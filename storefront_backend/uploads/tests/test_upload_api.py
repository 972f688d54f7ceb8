# uploads/tests/test_upload_api.py

from __future__ import annotations

import re

from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from .helpers import GIF_BYTES, JPEG_BYTES, PNG_BYTES, TempContentDirMixin

FILE_NAME_RE = re.compile(r"^\d{13}-[0-9a-f-]{36}\.(jpg|png|gif|webp)$")


class UploadApiTestCase(TempContentDirMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        cache.clear()
        self.client = APIClient()

    def upload(self, name, data, content_type="image/png"):
        return self.client.post(
            "/api/upload",
            {"file": SimpleUploadedFile(name, data, content_type=content_type)},
            format="multipart",
        )


class UploadPostTests(UploadApiTestCase):
    """
    GUARANTEES:
    - Valid images are stored and served from /uploads/<fileName>
    - Type comes from content, not from name or declared type
    - Responses are not cacheable
    """

    def test_upload_png(self):
        response = self.upload("shirt.png", PNG_BYTES)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertRegex(body["fileName"], FILE_NAME_RE)
        self.assertEqual(body["url"], f"/uploads/{body['fileName']}")
        self.assertEqual(body["type"], "image/png")
        self.assertEqual(body["size"], len(PNG_BYTES))
        self.assertTrue((self.upload_dir / body["fileName"]).is_file())
        self.assertEqual(response["Cache-Control"], "no-store, max-age=0")

    def test_mislabelled_jpeg_is_stored_as_jpeg(self):
        response = self.upload("notes.txt", JPEG_BYTES, content_type="text/plain")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.json()["fileName"].endswith(".jpg"))

    def test_spoofed_image_is_rejected(self):
        response = self.upload("evil.png", b"<?php echo 'pwned'; ?>")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.json(),
            {"error": "Invalid file type. Only JPEG, PNG, WebP and GIF are allowed"},
        )
        self.assertFalse(self.upload_dir.exists() and any(self.upload_dir.iterdir()))

    def test_missing_file(self):
        response = self.client.post("/api/upload", {}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json(), {"error": "No file provided"})

    @override_settings(UPLOAD_MAX_BYTES=16)
    def test_too_large(self):
        response = self.upload("big.gif", GIF_BYTES)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.json()["error"].startswith("File too large"))


class UploadListAndDeleteTests(UploadApiTestCase):
    def test_get_reports_limits_and_files(self):
        self.write_upload("a.png")

        response = self.client.get("/api/upload")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["message"], "Upload endpoint is working")
        self.assertEqual(body["maxFileSize"], "5MB")
        self.assertEqual(
            body["allowedTypes"], ["image/jpeg", "image/png", "image/webp", "image/gif"]
        )
        self.assertEqual(body["count"], 1)
        self.assertEqual(body["files"][0]["url"], "/uploads/a.png")

    def test_delete(self):
        path = self.write_upload("a.png")

        response = self.client.delete("/api/upload?filename=a.png")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.json()["success"])
        self.assertFalse(path.exists())

    def test_delete_requires_filename(self):
        response = self.client.delete("/api/upload")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_missing_file(self):
        self.upload_dir.mkdir(parents=True)
        response = self.client.delete("/api/upload?filename=nope.png")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_traversal(self):
        self.upload_dir.mkdir(parents=True)
        response = self.client.delete("/api/upload?filename=..")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class UploadCorsTests(UploadApiTestCase):
    """
    GUARANTEES:
    - Every /api/upload response carries open CORS headers
    - Cross-origin preflights reach the view (not the origin whitelist)
    """

    EXPECTED = {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Cache-Control": "no-store, max-age=0",
    }

    def assertCorsHeaders(self, response):
        for header, value in self.EXPECTED.items():
            self.assertEqual(response[header], value, header)

    def test_get_and_post_carry_cors_headers(self):
        self.assertCorsHeaders(self.client.get("/api/upload"))
        self.assertCorsHeaders(self.upload("shirt.png", PNG_BYTES))

    def test_error_responses_carry_cors_headers(self):
        response = self.client.delete("/api/upload")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertCorsHeaders(response)

    def test_options(self):
        response = self.client.options("/api/upload")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertCorsHeaders(response)

    def test_cross_origin_delete_preflight(self):
        response = self.client.options(
            "/api/upload",
            HTTP_ORIGIN="https://admin.example",
            HTTP_ACCESS_CONTROL_REQUEST_METHOD="DELETE",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertCorsHeaders(response)
