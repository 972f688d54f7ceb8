# catalog/repositories/mysql.py

"""
MYSQL REPOSITORIES (pymysql, raw SQL)

Connection policy:
- One short-lived connection per operation (the app runs a handful of
  gunicorn workers; no pool needed at this size).
- Connection failures are retried DB_CONNECT_RETRIES times (default 5),
  sleeping DB_CONNECT_RETRY_DELAY seconds (default 3) between attempts,
  then DatabaseUnavailableError is raised.
- utf8mb4 everywhere (product names carry accents and emoji).

JSON array columns (images, sizes, colors, features, tags) are stored as
JSON text and decoded by catalog.marshalling.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Optional

import pymysql
import pymysql.cursors
from django.conf import settings

from catalog.exceptions import DatabaseUnavailableError, StorageError
from catalog.marshalling import (
    PRODUCT_COLUMNS,
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
from catalog.types import DEFAULT_STORE_NAME, DEFAULT_WHATSAPP_NUMBER, Product, StoreSettings

logger = logging.getLogger(__name__)


# =========================================================
# SCHEMA
# =========================================================

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS products (
        id INT AUTO_INCREMENT PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        description TEXT NOT NULL,
        price DECIMAL(12, 2) NOT NULL,
        original_price DECIMAL(12, 2) NULL,
        image VARCHAR(1024) NOT NULL DEFAULT '',
        images JSON NULL,
        category VARCHAR(64) NOT NULL,
        subcategory VARCHAR(128) NOT NULL DEFAULT '',
        gender VARCHAR(16) NULL,
        sizes JSON NULL,
        colors JSON NULL,
        material VARCHAR(255) NULL,
        brand VARCHAR(255) NULL,
        rating DECIMAL(3, 2) NOT NULL DEFAULT 0,
        in_stock TINYINT(1) NOT NULL DEFAULT 1,
        features JSON NULL,
        tags JSON NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
            ON UPDATE CURRENT_TIMESTAMP,
        INDEX idx_products_category (category),
        INDEX idx_products_created_at (created_at)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci
    """,
    """
    CREATE TABLE IF NOT EXISTS store_settings (
        id INT PRIMARY KEY,
        store_name VARCHAR(255) NOT NULL,
        whatsapp_number VARCHAR(32) NOT NULL,
        store_icon VARCHAR(1024) NULL,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
            ON UPDATE CURRENT_TIMESTAMP
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci
    """,
)


# =========================================================
# CONNECTION (bounded retry)
# =========================================================


def connect(*, retries: Optional[int] = None, delay: Optional[float] = None):
    """
    Open a pymysql connection, retrying on OperationalError.

    retries/delay default to settings.DB_CONNECT_RETRIES / DB_CONNECT_RETRY_DELAY.
    """
    cfg = settings.MYSQL
    attempts = max(1, settings.DB_CONNECT_RETRIES if retries is None else retries)
    wait = settings.DB_CONNECT_RETRY_DELAY if delay is None else delay

    last_exc = None
    for attempt in range(1, attempts + 1):
        try:
            conn = pymysql.connect(
                host=cfg["HOST"],
                port=int(cfg["PORT"]),
                user=cfg["USER"],
                password=cfg["PASSWORD"],
                database=cfg["NAME"],
                charset="utf8mb4",
                cursorclass=pymysql.cursors.DictCursor,
                connect_timeout=max(1, int(cfg.get("CONNECT_TIMEOUT") or 10)),
            )
        except pymysql.err.OperationalError as exc:
            last_exc = exc
            logger.warning(
                "MySQL connection attempt failed",
                extra={
                    "attempt": attempt,
                    "attempts": attempts,
                    "host": cfg["HOST"],
                    "error": str(exc),
                },
            )
            if attempt < attempts:
                time.sleep(wait)
            continue

        if attempt > 1:
            logger.info("MySQL connected after retry", extra={"attempt": attempt})
        return conn

    logger.error(
        "MySQL unavailable after retries",
        extra={"attempts": attempts, "host": cfg["HOST"]},
    )
    raise DatabaseUnavailableError(
        f"Could not connect to MySQL at {cfg['HOST']}:{cfg['PORT']} "
        f"after {attempts} attempts"
    ) from last_exc


@contextmanager
def cursor(*, retries: Optional[int] = None):
    """Yield a DictCursor inside a transaction; commit on success."""
    conn = connect(retries=retries)
    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except pymysql.MySQLError as exc:
        conn.rollback()
        logger.exception("MySQL query failed")
        raise StorageError(str(exc)) from exc
    finally:
        conn.close()


def ensure_schema() -> None:
    """Create tables and the settings singleton row (idempotent)."""
    with cursor() as cur:
        for statement in SCHEMA_STATEMENTS:
            cur.execute(statement)
        cur.execute(
            "INSERT IGNORE INTO store_settings (id, store_name, whatsapp_number) "
            "VALUES (%s, %s, %s)",
            [SETTINGS_ROW_ID, DEFAULT_STORE_NAME, DEFAULT_WHATSAPP_NUMBER],
        )
    logger.info("MySQL schema ensured")


# =========================================================
# REPOSITORIES
# =========================================================

_INSERT_SQL = "INSERT INTO products ({cols}) VALUES ({marks})".format(
    cols=", ".join(PRODUCT_COLUMNS),
    marks=", ".join(["%s"] * len(PRODUCT_COLUMNS)),
)

_UPDATE_SQL = (
    "UPDATE products SET {assignments}, updated_at = CURRENT_TIMESTAMP "
    "WHERE id = %s"
).format(assignments=", ".join(f"{col} = %s" for col in PRODUCT_COLUMNS))


def _product_params(product: Product) -> list:
    row = product_to_row(product, json_text=True)
    return [row[col] for col in PRODUCT_COLUMNS]


class MySQLProductRepository(ProductRepository):
    backend_name = "mysql"

    def fetch_all(self) -> list[Product]:
        with cursor() as cur:
            cur.execute("SELECT * FROM products ORDER BY created_at DESC, id DESC")
            rows = cur.fetchall()
        return [product_from_row(row) for row in rows]

    def get(self, product_id: int) -> Optional[Product]:
        with cursor() as cur:
            cur.execute("SELECT * FROM products WHERE id = %s", [product_id])
            row = cur.fetchone()
        return product_from_row(row) if row else None

    def create(self, product: Product) -> Product:
        with cursor() as cur:
            cur.execute(_INSERT_SQL, _product_params(product))
            new_id = cur.lastrowid
            cur.execute("SELECT * FROM products WHERE id = %s", [new_id])
            row = cur.fetchone()

        if not row:
            raise StorageError(f"Product {new_id} vanished right after insert")

        logger.info("Product created", extra={"product_id": new_id})
        return product_from_row(row)

    def update(self, product_id: int, product: Product) -> Optional[Product]:
        with cursor() as cur:
            cur.execute(_UPDATE_SQL, [*_product_params(product), product_id])
            cur.execute("SELECT * FROM products WHERE id = %s", [product_id])
            row = cur.fetchone()

        if not row:
            return None

        logger.info("Product updated", extra={"product_id": product_id})
        return product_from_row(row)

    def delete(self, product_id: int) -> bool:
        with cursor() as cur:
            cur.execute("DELETE FROM products WHERE id = %s", [product_id])
            deleted = cur.rowcount > 0

        if deleted:
            logger.info("Product deleted", extra={"product_id": product_id})
        return deleted

    def ping(self) -> bool:
        # Single attempt: health checks must answer fast.
        try:
            with cursor(retries=1) as cur:
                cur.execute("SELECT 1")
                cur.fetchone()
        except StorageError as exc:
            logger.warning("MySQL ping failed", extra={"error": str(exc)})
            return False
        return True


class MySQLSettingsRepository(SettingsRepository):
    backend_name = "mysql"

    def get(self) -> StoreSettings:
        with cursor() as cur:
            cur.execute(
                "SELECT store_name, whatsapp_number, store_icon "
                "FROM store_settings WHERE id = %s",
                [SETTINGS_ROW_ID],
            )
            row = cur.fetchone()
        return settings_from_row(row)

    def update(self, store_settings: StoreSettings) -> StoreSettings:
        row = settings_to_row(store_settings)
        with cursor() as cur:
            cur.execute(
                "INSERT INTO store_settings (id, store_name, whatsapp_number, store_icon) "
                "VALUES (%s, %s, %s, %s) "
                "ON DUPLICATE KEY UPDATE store_name = VALUES(store_name), "
                "whatsapp_number = VALUES(whatsapp_number), "
                "store_icon = VALUES(store_icon), "
                "updated_at = CURRENT_TIMESTAMP",
                [
                    SETTINGS_ROW_ID,
                    row["store_name"],
                    row["whatsapp_number"],
                    row["store_icon"],
                ],
            )
        logger.info("Store settings updated")
        return settings_from_row(row)
