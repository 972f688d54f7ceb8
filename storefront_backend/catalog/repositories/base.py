# catalog/repositories/base.py

"""
REPOSITORY CONTRACT

Both storage backends implement these. Views only ever talk to this
interface, never to pymysql or the Supabase client.

Rules:
- list() returns newest first (created_at DESC)
- get()/update() return None for unknown ids
- delete() returns False when nothing was deleted
- failures raise catalog.exceptions.StorageError (never sentinel values)
"""

from __future__ import annotations

from typing import Optional

from catalog.filters import filter_products
from catalog.types import Product, ProductFilters, StoreSettings

SETTINGS_ROW_ID = 1


class ProductRepository:
    backend_name = "abstract"

    def fetch_all(self) -> list[Product]:
        raise NotImplementedError

    def list(self, filters: Optional[ProductFilters] = None) -> list[Product]:
        products = self.fetch_all()
        if filters is None:
            return products
        return filter_products(products, filters)

    def get(self, product_id: int) -> Optional[Product]:
        raise NotImplementedError

    def create(self, product: Product) -> Product:
        raise NotImplementedError

    def update(self, product_id: int, product: Product) -> Optional[Product]:
        raise NotImplementedError

    def delete(self, product_id: int) -> bool:
        raise NotImplementedError

    def ping(self) -> bool:
        raise NotImplementedError


class SettingsRepository:
    backend_name = "abstract"

    def get(self) -> StoreSettings:
        raise NotImplementedError

    def update(self, settings: StoreSettings) -> StoreSettings:
        raise NotImplementedError
