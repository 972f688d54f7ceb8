# catalog/backends.py

"""
Store backend names and the default pick.

Imported by the settings module, so nothing here may touch django.conf.
"""

from __future__ import annotations

MYSQL = "mysql"
SUPABASE = "supabase"
BACKENDS = (MYSQL, SUPABASE)


def select_store_backend(explicit: str, supabase_url: str, supabase_key: str) -> str:
    """
    An explicit STORE_BACKEND wins. Otherwise Supabase is used when both its
    URL and anon key are configured, and MySQL in every other case.
    """
    backend = (explicit or "").strip().lower()
    if backend:
        return backend
    if (supabase_url or "").strip() and (supabase_key or "").strip():
        return SUPABASE
    return MYSQL
