# catalog/management/commands/wait_for_db.py

"""
Block until the store backend answers (container start-up ordering).

- mysql:    catalog.repositories.mysql.connect() with its retry loop
- supabase: repository ping, retried the same way

Exits non-zero when the backend never comes up.
"""

from __future__ import annotations

import time

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from catalog.exceptions import DatabaseUnavailableError, StorageError
from catalog.repositories import get_product_repository


class Command(BaseCommand):
    help = "Wait until the configured store backend accepts connections."

    def add_arguments(self, parser):
        parser.add_argument(
            "--retries",
            type=int,
            default=None,
            help="Attempts before giving up (default: DB_CONNECT_RETRIES).",
        )
        parser.add_argument(
            "--delay",
            type=float,
            default=None,
            help="Seconds between attempts (default: DB_CONNECT_RETRY_DELAY).",
        )

    def handle(self, *args, **options):
        retries = options.get("retries") or settings.DB_CONNECT_RETRIES
        delay = options.get("delay")
        if delay is None:
            delay = settings.DB_CONNECT_RETRY_DELAY

        backend = settings.STORE_BACKEND
        self.stdout.write(self.style.WARNING(f"Waiting for {backend} backend..."))

        if backend == "mysql":
            self._wait_mysql(retries, delay)
        else:
            self._wait_ping(retries, delay)

        self.stdout.write(self.style.SUCCESS(f"✅ {backend} backend is available."))

    def _wait_mysql(self, retries: int, delay: float) -> None:
        from catalog.repositories.mysql import connect

        try:
            conn = connect(retries=retries, delay=delay)
        except DatabaseUnavailableError as exc:
            raise CommandError(str(exc)) from exc
        conn.close()

    def _wait_ping(self, retries: int, delay: float) -> None:
        try:
            repository = get_product_repository()
        except StorageError as exc:
            raise CommandError(str(exc)) from exc

        for attempt in range(1, retries + 1):
            if repository.ping():
                return
            self.stdout.write(f"Attempt {attempt}/{retries} failed")
            if attempt < retries:
                time.sleep(delay)

        raise CommandError(f"Store backend unavailable after {retries} attempts")
