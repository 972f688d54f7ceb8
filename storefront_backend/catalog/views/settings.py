# catalog/views/settings.py

"""
STORE SETTINGS

GET /api/settings   -> {"storeName", "whatsappNumber", "storeIcon"?}
PUT /api/settings   -> upsert of the singleton settings row

Defaults are returned when no row exists yet.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.exceptions import StorageError
from catalog.repositories import get_settings_repository
from catalog.serializers import StoreSettingsSerializer

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("storeName", "whatsappNumber")


class StoreSettingsView(APIView):
    @extend_schema(
        tags=["Settings"],
        responses={200: StoreSettingsSerializer, 500: OpenApiResponse(description="Storage failure")},
    )
    def get(self, request):
        try:
            store_settings = get_settings_repository().get()
        except StorageError:
            logger.exception("Error fetching settings")
            return Response(
                {"error": "Failed to fetch settings"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(StoreSettingsSerializer(store_settings).data)

    @extend_schema(
        tags=["Settings"],
        request=StoreSettingsSerializer,
        responses={
            200: OpenApiResponse(description="Settings updated"),
            400: OpenApiResponse(description="Missing or invalid fields"),
            500: OpenApiResponse(description="Storage failure"),
        },
    )
    def put(self, request):
        data = request.data if isinstance(request.data, dict) else {}
        if any(not str(data.get(name) or "").strip() for name in REQUIRED_FIELDS):
            return Response(
                {"error": "Missing required fields: storeName, whatsappNumber"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = StoreSettingsSerializer(data=data)
        serializer.is_valid(raise_exception=True)

        try:
            saved = get_settings_repository().update(serializer.to_settings())
        except StorageError:
            logger.exception("Error updating settings")
            return Response(
                {"error": "Failed to update settings"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "message": "Settings updated successfully",
                "settings": StoreSettingsSerializer(saved).data,
            }
        )
