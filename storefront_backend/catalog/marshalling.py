# catalog/marshalling.py

"""
ROW <-> PRODUCT MARSHALLING

Normalizes rows from both backends into `Product`:
- MySQL returns JSON array columns as text (or bytes), DECIMAL as Decimal,
  TINYINT(1) as 0/1.
- Supabase returns jsonb arrays as lists and numerics as numbers or strings.

Bad JSON never breaks a listing: it is logged and treated as an empty list.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from catalog.types import JSON_LIST_FIELDS, Product, StoreSettings

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = (
    "name",
    "description",
    "price",
    "original_price",
    "image",
    "images",
    "category",
    "subcategory",
    "gender",
    "sizes",
    "colors",
    "material",
    "brand",
    "rating",
    "in_stock",
    "features",
    "tags",
)


def json_list(value: Any) -> list:
    if value is None or value == "":
        return []

    if isinstance(value, (list, tuple)):
        return list(value)

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")

    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            logger.warning("Unparseable JSON list column", extra={"value": value[:200]})
            return []
        if isinstance(parsed, list):
            return parsed
        logger.warning("JSON column is not a list", extra={"value": value[:200]})
        return []

    return []


def _to_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    if value is None or value == "":
        return default
    try:
        return float(Decimal(str(value)))
    except (InvalidOperation, ValueError, TypeError):
        logger.warning("Invalid numeric column", extra={"value": str(value)[:50]})
        return default


def _to_bool(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray)):
        return value not in (b"\x00", b"", b"0")
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "t", "yes")
    return bool(value)


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    try:
        # Supabase sends ISO-8601 strings, sometimes with a trailing Z
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def product_from_row(row: dict) -> Product:
    return Product(
        id=int(row["id"]) if row.get("id") is not None else None,
        name=row.get("name") or "",
        description=row.get("description") or "",
        price=_to_float(row.get("price")),
        original_price=_to_float(row.get("original_price"), default=None) or None,
        image=row.get("image") or "",
        images=json_list(row.get("images")),
        category=row.get("category") or "",
        subcategory=row.get("subcategory") or "",
        gender=row.get("gender") or None,
        sizes=json_list(row.get("sizes")),
        colors=json_list(row.get("colors")),
        material=row.get("material") or "",
        brand=row.get("brand") or "",
        rating=_to_float(row.get("rating")),
        in_stock=_to_bool(row.get("in_stock", True)),
        features=json_list(row.get("features")),
        tags=json_list(row.get("tags")),
        created_at=_to_datetime(row.get("created_at")),
        updated_at=_to_datetime(row.get("updated_at")),
    )


def product_to_row(product: Product, *, json_text: bool) -> dict:
    """
    Column values for INSERT/UPDATE, in PRODUCT_COLUMNS order.

    json_text=True encodes list columns as JSON text (MySQL);
    False keeps native lists (Supabase jsonb).
    """
    row = {
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "original_price": product.original_price or None,
        "image": product.image,
        "images": product.images or None,
        "category": product.category,
        "subcategory": product.subcategory,
        "gender": product.gender or None,
        "sizes": product.sizes or [],
        "colors": product.colors or [],
        "material": product.material or None,
        "brand": product.brand or None,
        "rating": product.rating,
        "in_stock": bool(product.in_stock),
        "features": product.features or [],
        "tags": product.tags or [],
    }

    if json_text:
        for name in JSON_LIST_FIELDS:
            if row[name] is not None:
                row[name] = json.dumps(row[name], ensure_ascii=False)

    return row


def settings_from_row(row: Optional[dict]) -> StoreSettings:
    if not row:
        return StoreSettings()
    defaults = StoreSettings()
    return StoreSettings(
        store_name=row.get("store_name") or defaults.store_name,
        whatsapp_number=row.get("whatsapp_number") or defaults.whatsapp_number,
        store_icon=row.get("store_icon") or None,
    )


def settings_to_row(settings: StoreSettings) -> dict:
    return {
        "store_name": settings.store_name,
        "whatsapp_number": settings.whatsapp_number,
        "store_icon": settings.store_icon or None,
    }
