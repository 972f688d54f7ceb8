# catalog/types.py

"""
CATALOG TYPES

Backend-neutral product and settings records.

Both repositories (MySQL, Supabase) return these; serializers turn them into
the camelCase JSON the storefront expects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

DEFAULT_STORE_NAME = "Tu Tienda Online"
DEFAULT_WHATSAPP_NUMBER = "595981234567"

# Columns holding JSON-encoded arrays
JSON_LIST_FIELDS = ("images", "sizes", "colors", "features", "tags")


@dataclass
class Product:
    name: str
    price: float
    description: str = ""
    id: Optional[int] = None
    original_price: Optional[float] = None
    image: str = ""
    images: list[str] = field(default_factory=list)
    category: str = ""
    subcategory: str = ""
    gender: Optional[str] = None
    sizes: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    material: str = ""
    brand: str = ""
    rating: float = 0.0
    in_stock: bool = True
    features: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_data(cls, data: dict) -> "Product":
        """Build from validated serializer data, ignoring unknown keys."""
        known = {f for f in cls.__dataclass_fields__}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class StoreSettings:
    store_name: str = DEFAULT_STORE_NAME
    whatsapp_number: str = DEFAULT_WHATSAPP_NUMBER
    store_icon: Optional[str] = None


@dataclass
class ProductFilters:
    category: Optional[str] = None
    gender: Optional[str] = None
    size: Optional[str] = None
    q: Optional[str] = None
    in_stock: Optional[bool] = None

    @property
    def is_empty(self) -> bool:
        return not any(
            (self.category, self.gender, self.size, self.q, self.in_stock is not None)
        )
