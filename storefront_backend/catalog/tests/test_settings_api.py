# catalog/tests/test_settings_api.py

from __future__ import annotations

from unittest import mock

from django.core.cache import cache
from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.test import APIClient

from catalog.exceptions import StorageError
from catalog.types import StoreSettings


class StoreSettingsApiTests(SimpleTestCase):
    """
    GUARANTEES:
    - GET always answers with a settings object
    - PUT requires storeName + whatsappNumber and stores digits only
    """

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.repo = mock.MagicMock()
        patcher = mock.patch(
            "catalog.views.settings.get_settings_repository", return_value=self.repo
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_get_defaults(self):
        self.repo.get.return_value = StoreSettings()

        response = self.client.get("/api/settings")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.json(),
            {"storeName": "Tu Tienda Online", "whatsappNumber": "595981234567"},
        )

    def test_get_includes_icon_when_set(self):
        self.repo.get.return_value = StoreSettings("Mi Tienda", "595900000000", "/uploads/i.png")

        response = self.client.get("/api/settings")

        self.assertEqual(response.json()["storeIcon"], "/uploads/i.png")

    def test_get_storage_failure(self):
        self.repo.get.side_effect = StorageError("down")

        response = self.client.get("/api/settings")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json(), {"error": "Failed to fetch settings"})

    def test_put_normalizes_whatsapp_number(self):
        self.repo.update.side_effect = lambda s: s

        response = self.client.put(
            "/api/settings",
            {"storeName": " Mi Tienda ", "whatsappNumber": "+595 981 234-567"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        saved = self.repo.update.call_args.args[0]
        self.assertEqual(saved.store_name, "Mi Tienda")
        self.assertEqual(saved.whatsapp_number, "595981234567")
        self.assertIsNone(saved.store_icon)
        self.assertEqual(response.json()["message"], "Settings updated successfully")

    def test_put_missing_fields(self):
        response = self.client.put("/api/settings", {"storeName": "X"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.json(), {"error": "Missing required fields: storeName, whatsappNumber"}
        )

    def test_put_rejects_short_number(self):
        response = self.client.put(
            "/api/settings", {"storeName": "X", "whatsappNumber": "12a"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("at least 6 digits", response.json()["error"])
        self.repo.update.assert_not_called()
