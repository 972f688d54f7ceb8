# catalog/management/commands/init_schema.py

"""
Create the MySQL tables (products, store_settings) and the settings row.

Idempotent (CREATE TABLE IF NOT EXISTS / INSERT IGNORE). On Supabase the
tables are managed in the Supabase dashboard, so the command only reports.
"""

from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from catalog.exceptions import StorageError


class Command(BaseCommand):
    help = "Create the MySQL catalog schema (no-op on Supabase)."

    def handle(self, *args, **options):
        if settings.STORE_BACKEND != "mysql":
            self.stdout.write(
                self.style.WARNING(
                    f"STORE_BACKEND is '{settings.STORE_BACKEND}'; schema is managed "
                    "outside this app. Skipping."
                )
            )
            return

        from catalog.repositories.mysql import ensure_schema

        try:
            ensure_schema()
        except StorageError as exc:
            raise CommandError(f"Schema creation failed: {exc}") from exc

        self.stdout.write(self.style.SUCCESS("✅ MySQL schema is ready."))
