# backend/urls.py
"""
PROJECT URLS

API routes live under /api/ (trailing slash optional, the storefront calls
/api/products and /api/products/3 without one):

- /api/                 root / index
- /api/health           storage connectivity (200 or 503)
- /api/products...      catalog.urls
- /api/settings         catalog.urls
- /api/upload           uploads.urls
- /api/schema, /api/docs

Uploaded images are served from the site root:
- /uploads/<path>       uploads.public_urls
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.urls import include, path, re_path
from django.utils import timezone
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from catalog.exceptions import StorageError
from catalog.repositories import get_product_repository

logger = logging.getLogger(__name__)


# ------------------ API ROOT (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "message": {"type": "string"},
                "docs": {"type": "object"},
                "modules": {"type": "object"},
            },
        }
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Storefront API is running",
            "docs": {
                "swagger": "/api/docs/",
                "schema": "/api/schema/",
            },
            "modules": {
                "health": "/api/health",
                "products": "/api/products",
                "settings": "/api/settings",
                "upload": "/api/upload",
                "uploads": settings.UPLOAD_URL_PREFIX,
            },
        }
    )


# ------------------ HEALTH CHECK (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "timestamp": {"type": "string"},
                "database": {"type": "string"},
                "backend": {"type": "string"},
                "version": {"type": "string"},
            },
        },
        503: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "timestamp": {"type": "string"},
                "database": {"type": "string"},
                "backend": {"type": "string"},
                "version": {"type": "string"},
                "error": {"type": "string"},
            },
        },
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    Minimal operational endpoint:
    - Confirms app is responding
    - Confirms the store backend answers a trivial query
    """
    backend = settings.STORE_BACKEND
    try:
        connected = get_product_repository().ping()
    except StorageError as exc:
        logger.error("Health check failed", extra={"backend": backend, "error": str(exc)})
        return Response(
            {
                "status": "error",
                "timestamp": timezone.now().isoformat(),
                "database": "error",
                "backend": backend,
                "error": "Health check failed",
            },
            status=503,
        )

    body = {
        "status": "ok",
        "timestamp": timezone.now().isoformat(),
        "database": "connected" if connected else "disconnected",
        "backend": backend,
        "version": settings.API_VERSION,
    }
    return Response(body, status=200 if connected else 503)


# ------------------ API ROUTES (ALL UNDER /api/) ------------------
api_urlpatterns = [
    path("", api_root, name="api-root"),
    re_path(r"^health/?$", health_check, name="health-check"),
    # OpenAPI / Swagger
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # App modules
    path("", include("catalog.urls")),
    path("", include("uploads.urls")),
]

urlpatterns = [
    # Root convenience: visiting / takes you to Swagger docs
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
    path("uploads/", include("uploads.public_urls")),
]
