# catalog/tests/test_backends.py

from __future__ import annotations

from django.test import SimpleTestCase, override_settings

from catalog.backends import MYSQL, SUPABASE, select_store_backend
from catalog.exceptions import StorageConfigurationError
from catalog.repositories import get_product_repository

URL = "https://abc.supabase.co"
KEY = "anon-key"


class SelectStoreBackendTests(SimpleTestCase):
    """
    GUARANTEES:
    - An explicit STORE_BACKEND always wins (trimmed, lower-cased)
    - Without one, Supabase needs both URL and anon key; otherwise MySQL
    """

    def test_supabase_when_url_and_key_are_set(self):
        self.assertEqual(select_store_backend("", URL, KEY), SUPABASE)

    def test_mysql_when_supabase_is_incomplete(self):
        self.assertEqual(select_store_backend("", URL, ""), MYSQL)
        self.assertEqual(select_store_backend("", "", KEY), MYSQL)
        self.assertEqual(select_store_backend("", "  ", "  "), MYSQL)
        self.assertEqual(select_store_backend(None, "", ""), MYSQL)

    def test_explicit_choice_wins(self):
        self.assertEqual(select_store_backend(" MySQL ", URL, KEY), MYSQL)
        self.assertEqual(select_store_backend("supabase", "", ""), SUPABASE)


class RepositoryFactoryTests(SimpleTestCase):
    @override_settings(STORE_BACKEND="mongo")
    def test_unknown_backend_is_rejected(self):
        with self.assertRaisesMessage(StorageConfigurationError, "Unknown STORE_BACKEND 'mongo'"):
            get_product_repository()
