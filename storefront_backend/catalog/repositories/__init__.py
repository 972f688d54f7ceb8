# catalog/repositories/__init__.py

"""
Repository selection.

settings.STORE_BACKEND picks the implementation:
- "mysql"    -> catalog.repositories.mysql (pymysql, raw SQL)
- "supabase" -> catalog.repositories.supabase (supabase-py)
"""

from __future__ import annotations

from django.conf import settings

from catalog.backends import BACKENDS, MYSQL, SUPABASE
from catalog.exceptions import StorageConfigurationError
from catalog.repositories.base import ProductRepository, SettingsRepository


def _backend() -> str:
    backend = (getattr(settings, "STORE_BACKEND", "") or MYSQL).strip().lower()
    if backend not in BACKENDS:
        raise StorageConfigurationError(
            f"Unknown STORE_BACKEND '{backend}'. Expected one of: {', '.join(BACKENDS)}"
        )
    return backend


def get_product_repository() -> ProductRepository:
    if _backend() == SUPABASE:
        from catalog.repositories.supabase import SupabaseProductRepository

        return SupabaseProductRepository()

    from catalog.repositories.mysql import MySQLProductRepository

    return MySQLProductRepository()


def get_settings_repository() -> SettingsRepository:
    if _backend() == SUPABASE:
        from catalog.repositories.supabase import SupabaseSettingsRepository

        return SupabaseSettingsRepository()

    from catalog.repositories.mysql import MySQLSettingsRepository

    return MySQLSettingsRepository()


__all__ = [
    "ProductRepository",
    "SettingsRepository",
    "get_product_repository",
    "get_settings_repository",
]
