# catalog/tests/test_commands.py

from __future__ import annotations

from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, override_settings

from catalog.exceptions import DatabaseUnavailableError, StorageError
from catalog.management.commands.seed_products import SAMPLE_PRODUCTS
from catalog.types import Product


class SeedProductsCommandTests(SimpleTestCase):
    @mock.patch("catalog.management.commands.seed_products.get_product_repository")
    def test_skips_existing_names(self, get_repo):
        repo = get_repo.return_value
        repo.fetch_all.return_value = [Product(name=SAMPLE_PRODUCTS[0]["name"], price=1)]

        call_command("seed_products", stdout=StringIO())

        created = [c.args[0].name for c in repo.create.call_args_list]
        self.assertEqual(created, [p["name"] for p in SAMPLE_PRODUCTS[1:]])

    @mock.patch("catalog.management.commands.seed_products.get_product_repository")
    def test_storage_failure_is_a_command_error(self, get_repo):
        get_repo.return_value.fetch_all.side_effect = StorageError("down")

        with self.assertRaises(CommandError):
            call_command("seed_products", stdout=StringIO())


class InitSchemaCommandTests(SimpleTestCase):
    @override_settings(STORE_BACKEND="supabase")
    @mock.patch("catalog.repositories.mysql.ensure_schema")
    def test_skipped_on_supabase(self, ensure_schema):
        out = StringIO()
        call_command("init_schema", stdout=out)

        ensure_schema.assert_not_called()
        self.assertIn("Skipping", out.getvalue())

    @override_settings(STORE_BACKEND="mysql")
    @mock.patch("catalog.repositories.mysql.ensure_schema")
    def test_runs_on_mysql(self, ensure_schema):
        call_command("init_schema", stdout=StringIO())
        ensure_schema.assert_called_once_with()

    @override_settings(STORE_BACKEND="mysql")
    @mock.patch("catalog.repositories.mysql.ensure_schema", side_effect=StorageError("boom"))
    def test_failure_is_a_command_error(self, ensure_schema):
        with self.assertRaises(CommandError):
            call_command("init_schema", stdout=StringIO())


class WaitForDbCommandTests(SimpleTestCase):
    @override_settings(STORE_BACKEND="mysql")
    @mock.patch("catalog.repositories.mysql.connect")
    def test_mysql_available(self, connect):
        call_command("wait_for_db", retries=3, delay=0, stdout=StringIO())

        connect.assert_called_once_with(retries=3, delay=0)
        connect.return_value.close.assert_called_once()

    @override_settings(STORE_BACKEND="mysql")
    @mock.patch(
        "catalog.repositories.mysql.connect",
        side_effect=DatabaseUnavailableError("down"),
    )
    def test_mysql_never_available(self, connect):
        with self.assertRaises(CommandError):
            call_command("wait_for_db", retries=2, delay=0, stdout=StringIO())

    @override_settings(STORE_BACKEND="supabase")
    @mock.patch("catalog.management.commands.wait_for_db.time.sleep")
    @mock.patch("catalog.management.commands.wait_for_db.get_product_repository")
    def test_supabase_retries_ping(self, get_repo, sleep):
        get_repo.return_value.ping.side_effect = [False, True]

        call_command("wait_for_db", retries=3, delay=0.5, stdout=StringIO())

        self.assertEqual(get_repo.return_value.ping.call_count, 2)
        sleep.assert_called_once_with(0.5)

    @override_settings(STORE_BACKEND="supabase")
    @mock.patch("catalog.management.commands.wait_for_db.time.sleep")
    @mock.patch("catalog.management.commands.wait_for_db.get_product_repository")
    def test_supabase_never_available(self, get_repo, sleep):
        get_repo.return_value.ping.return_value = False

        with self.assertRaises(CommandError):
            call_command("wait_for_db", retries=2, delay=0, stdout=StringIO())
