# catalog/repositories/supabase.py

"""
SUPABASE REPOSITORIES (supabase-py client)

Tables mirror the MySQL schema:
- products        (jsonb array columns)
- store_settings  (singleton row, id = 1)

The client is created lazily once per process. Any client/network failure
is wrapped in StorageError so views handle both backends the same way.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from supabase import Client, create_client

from catalog.exceptions import StorageConfigurationError, StorageError
from catalog.marshalling import (
    product_from_row,
    product_to_row,
    settings_from_row,
    settings_to_row,
)
from catalog.repositories.base import (
    SETTINGS_ROW_ID,
    ProductRepository,
    SettingsRepository,
)
from catalog.types import Product, StoreSettings

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"
SETTINGS_TABLE = "store_settings"

_client: Optional[Client] = None


def get_client() -> Client:
    global _client
    if _client is not None:
        return _client

    url = (settings.SUPABASE_URL or "").strip()
    key = (settings.SUPABASE_ANON_KEY or "").strip()
    if not url or not key:
        raise StorageConfigurationError(
            "Supabase backend selected but SUPABASE_URL / SUPABASE_ANON_KEY are not set"
        )

    _client = create_client(url, key)
    logger.info("Supabase client initialized", extra={"url": url})
    return _client


def reset_client() -> None:
    global _client
    _client = None


def _run(description: str, query):
    try:
        return query.execute()
    except Exception as exc:
        logger.exception("Supabase request failed", extra={"operation": description})
        raise StorageError(f"Supabase {description} failed: {exc}") from exc


class SupabaseProductRepository(ProductRepository):
    backend_name = "supabase"

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    def _table(self):
        return self.client.table(PRODUCTS_TABLE)

    def fetch_all(self) -> list[Product]:
        response = _run(
            "list products",
            self._table().select("*").order("created_at", desc=True),
        )
        return [product_from_row(row) for row in (response.data or [])]

    def get(self, product_id: int) -> Optional[Product]:
        response = _run(
            "get product",
            self._table().select("*").eq("id", product_id).limit(1),
        )
        rows = response.data or []
        return product_from_row(rows[0]) if rows else None

    def create(self, product: Product) -> Product:
        row = product_to_row(product, json_text=False)
        response = _run("create product", self._table().insert(row))
        rows = response.data or []
        if not rows:
            raise StorageError("Supabase insert returned no row")

        created = product_from_row(rows[0])
        logger.info("Product created", extra={"product_id": created.id})
        return created

    def update(self, product_id: int, product: Product) -> Optional[Product]:
        row = product_to_row(product, json_text=False)
        response = _run(
            "update product",
            self._table().update(row).eq("id", product_id),
        )
        rows = response.data or []
        if not rows:
            return None

        logger.info("Product updated", extra={"product_id": product_id})
        return product_from_row(rows[0])

    def delete(self, product_id: int) -> bool:
        response = _run(
            "delete product",
            self._table().delete().eq("id", product_id),
        )
        deleted = bool(response.data)
        if deleted:
            logger.info("Product deleted", extra={"product_id": product_id})
        return deleted

    def ping(self) -> bool:
        try:
            _run("ping", self.client.table(SETTINGS_TABLE).select("id").limit(1))
        except StorageError:
            return False
        return True


class SupabaseSettingsRepository(SettingsRepository):
    backend_name = "supabase"

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    def get(self) -> StoreSettings:
        response = _run(
            "get settings",
            self.client.table(SETTINGS_TABLE)
            .select("store_name, whatsapp_number, store_icon")
            .eq("id", SETTINGS_ROW_ID)
            .limit(1),
        )
        rows = response.data or []
        return settings_from_row(rows[0] if rows else None)

    def update(self, store_settings: StoreSettings) -> StoreSettings:
        row = {"id": SETTINGS_ROW_ID, **settings_to_row(store_settings)}
        _run("update settings", self.client.table(SETTINGS_TABLE).upsert(row))
        logger.info("Store settings updated")
        return settings_from_row(row)
