# uploads/views/upload.py

"""
UPLOAD API

POST   /api/upload                  multipart, field "file"
GET    /api/upload                  limits + stored files (admin gallery, debug panel)
DELETE /api/upload?filename=<name>  remove one stored file

Rules:
- Type is decided by signature sniffing, not by Content-Type or extension
- Max size settings.UPLOAD_MAX_BYTES (5MB)
- Writes are throttled (scope "upload")
- Responses are never cached
"""

from __future__ import annotations

import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from uploads.exceptions import (
    UnsafePathError,
    UploadDirectoryError,
    UploadNotFoundError,
    UploadValidationError,
)
from uploads.paths import resolve_upload_dir, runtime_environment
from uploads.services import delete_upload, list_uploads, max_size_label, save_upload
from uploads.sniffing import ALLOWED_MIME_TYPES

logger = logging.getLogger(__name__)

API_CORS_HEADERS = {
    "Cache-Control": "no-store, max-age=0",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class UploadThrottle(AnonRateThrottle):
    scope = "upload"


class UploadRequestSerializer(serializers.Serializer):
    file = serializers.FileField()


class UploadResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    url = serializers.CharField()
    fileName = serializers.CharField()
    size = serializers.IntegerField()
    type = serializers.CharField()


class UploadedFileSerializer(serializers.Serializer):
    name = serializers.CharField()
    url = serializers.CharField()
    size = serializers.IntegerField()
    modified = serializers.DateTimeField()


def _error(message: str, code: int) -> Response:
    return Response({"error": message}, status=code)


class UploadView(APIView):
    parser_classes = [MultiPartParser, FormParser]

    def get_throttles(self):
        if self.request.method in ("POST", "DELETE"):
            return [UploadThrottle()]
        return super().get_throttles()

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        for header, value in API_CORS_HEADERS.items():
            response[header] = value
        return response

    @extend_schema(
        tags=["Uploads"],
        request={"multipart/form-data": UploadRequestSerializer},
        responses={
            200: UploadResponseSerializer,
            400: OpenApiResponse(description="No file / too large / not an allowed image"),
            429: OpenApiResponse(description="Rate limited"),
            500: OpenApiResponse(description="Filesystem failure"),
        },
        description="Upload an image (JPEG, PNG, WebP, GIF; max 5MB).",
    )
    def post(self, request):
        upload = request.FILES.get("file")
        if upload is None:
            return _error("No file provided", status.HTTP_400_BAD_REQUEST)

        # Reject before reading the body into memory
        if upload.size is not None and upload.size > settings.UPLOAD_MAX_BYTES:
            return _error(
                f"File too large. Maximum size is {max_size_label()}",
                status.HTTP_400_BAD_REQUEST,
            )

        data = upload.read()

        try:
            stored = save_upload(data, original_name=upload.name)
        except UploadValidationError as exc:
            logger.info(
                "Upload rejected",
                extra={
                    "original_name": upload.name,
                    "declared_type": upload.content_type,
                    "reason": str(exc),
                },
            )
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        except UploadDirectoryError:
            logger.exception("Upload failed")
            return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {
                "success": True,
                "url": stored.url,
                "fileName": stored.file_name,
                "size": stored.size,
                "type": stored.mime_type,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Uploads"],
        responses={200: OpenApiResponse(description="Upload limits and stored files")},
        description="Upload health check + list of stored images (newest first).",
    )
    def get(self, request):
        try:
            files = list_uploads()
        except OSError:
            logger.exception("Cannot list upload directory")
            return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {
                "message": "Upload endpoint is working",
                "maxFileSize": max_size_label(),
                "maxFileSizeBytes": settings.UPLOAD_MAX_BYTES,
                "allowedTypes": ALLOWED_MIME_TYPES,
                "uploadDir": str(resolve_upload_dir()),
                "environment": runtime_environment(),
                "count": len(files),
                "files": UploadedFileSerializer(files, many=True).data,
            }
        )

    @extend_schema(
        tags=["Uploads"],
        parameters=[
            OpenApiParameter(
                name="filename",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Name of a stored file (as returned in fileName).",
            ),
        ],
        responses={
            200: OpenApiResponse(description="File deleted"),
            400: OpenApiResponse(description="Missing or unsafe filename"),
            404: OpenApiResponse(description="File not found"),
        },
    )
    def delete(self, request):
        file_name = (request.query_params.get("filename") or "").strip()
        if not file_name:
            return _error("Filename is required", status.HTTP_400_BAD_REQUEST)

        try:
            delete_upload(file_name)
        except UnsafePathError:
            logger.warning("Rejected unsafe delete", extra={"file_name": file_name})
            return _error("Invalid filename", status.HTTP_400_BAD_REQUEST)
        except UploadNotFoundError:
            return _error("File not found", status.HTTP_404_NOT_FOUND)
        except UploadDirectoryError:
            logger.exception("Delete failed", extra={"file_name": file_name})
            return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "message": f"File {file_name} deleted"})
