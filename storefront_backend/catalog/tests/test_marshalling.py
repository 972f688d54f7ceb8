# catalog/tests/test_marshalling.py

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal

from django.test import SimpleTestCase

from catalog.marshalling import (
    PRODUCT_COLUMNS,
    json_list,
    product_from_row,
    product_to_row,
    settings_from_row,
    settings_to_row,
)
from catalog.types import DEFAULT_STORE_NAME, DEFAULT_WHATSAPP_NUMBER, Product, StoreSettings


class JsonListTests(SimpleTestCase):
    """
    GUARANTEES:
    - JSON array columns decode from text, bytes or native lists
    - Garbage never raises; it becomes []
    """

    def test_decodes_text_and_bytes(self):
        self.assertEqual(json_list('["S", "M"]'), ["S", "M"])
        self.assertEqual(json_list(b'["Negro"]'), ["Negro"])

    def test_native_list_passes_through(self):
        self.assertEqual(json_list(["a", "b"]), ["a", "b"])

    def test_empty_and_invalid_values(self):
        self.assertEqual(json_list(None), [])
        self.assertEqual(json_list(""), [])
        self.assertEqual(json_list("not json"), [])
        self.assertEqual(json_list('{"a": 1}'), [])


class ProductRowTests(SimpleTestCase):
    def _row(self, **overrides):
        row = {
            "id": 7,
            "name": "Remera",
            "description": "Algodón",
            "price": Decimal("4500.00"),
            "original_price": None,
            "image": "/uploads/a.jpg",
            "images": '["/uploads/a.jpg"]',
            "category": "prendas",
            "subcategory": "remeras",
            "gender": None,
            "sizes": '["S", "M"]',
            "colors": '["Negro"]',
            "material": None,
            "brand": None,
            "rating": Decimal("4.5"),
            "in_stock": 1,
            "features": None,
            "tags": '["casual"]',
            "created_at": datetime(2024, 1, 2, 3, 4, 5),
            "updated_at": None,
        }
        row.update(overrides)
        return row

    def test_mysql_row_decodes(self):
        product = product_from_row(self._row())

        self.assertEqual(product.id, 7)
        self.assertEqual(product.price, 4500.0)
        self.assertIsNone(product.original_price)
        self.assertEqual(product.sizes, ["S", "M"])
        self.assertEqual(product.features, [])
        self.assertEqual(product.rating, 4.5)
        self.assertTrue(product.in_stock)
        self.assertEqual(product.material, "")
        self.assertEqual(product.created_at, datetime(2024, 1, 2, 3, 4, 5))

    def test_supabase_row_decodes(self):
        product = product_from_row(
            self._row(
                sizes=["38", "39"],
                in_stock=False,
                original_price=6000,
                created_at="2024-05-01T10:00:00Z",
            )
        )

        self.assertEqual(product.sizes, ["38", "39"])
        self.assertFalse(product.in_stock)
        self.assertEqual(product.original_price, 6000.0)
        self.assertEqual(product.created_at.year, 2024)
        self.assertIsNotNone(product.created_at.tzinfo)

    def test_row_for_mysql_encodes_lists_as_json_text(self):
        product = Product(name="Jean", price=8500, sizes=["26", "28"], tags=["denim"])
        row = product_to_row(product, json_text=True)

        self.assertEqual(tuple(row), PRODUCT_COLUMNS)
        self.assertEqual(json.loads(row["sizes"]), ["26", "28"])
        self.assertEqual(json.loads(row["tags"]), ["denim"])
        self.assertIsNone(row["images"])
        self.assertIsNone(row["original_price"])

    def test_row_for_supabase_keeps_native_lists(self):
        product = Product(name="Jean", price=8500, colors=["Azul"])
        row = product_to_row(product, json_text=False)

        self.assertEqual(row["colors"], ["Azul"])
        self.assertEqual(row["sizes"], [])

    def test_non_ascii_survives_json_text(self):
        product = Product(name="Remera", price=1, tags=["algodón"])
        row = product_to_row(product, json_text=True)
        self.assertIn("algodón", row["tags"])


class ProductRecordTests(SimpleTestCase):
    """
    GUARANTEES:
    - Product is a plain record: its fields and from_data(), nothing derived
    - from_data() drops keys that are not fields
    """

    def test_from_data_ignores_unknown_keys(self):
        product = Product.from_data(
            {"name": "Perfume X", "price": 100.0, "description": "d", "inStock": False}
        )

        self.assertEqual(product.name, "Perfume X")
        self.assertTrue(product.in_stock)
        self.assertEqual(product.sizes, [])

    def test_no_derived_helpers(self):
        for name in ("to_dict", "has_discount"):
            self.assertFalse(hasattr(Product, name), name)


class SettingsRowTests(SimpleTestCase):
    def test_missing_row_gives_defaults(self):
        settings = settings_from_row(None)
        self.assertEqual(settings.store_name, DEFAULT_STORE_NAME)
        self.assertEqual(settings.whatsapp_number, DEFAULT_WHATSAPP_NUMBER)
        self.assertIsNone(settings.store_icon)

    def test_row_round_trip_drops_empty_icon(self):
        row = settings_to_row(StoreSettings("Mi Tienda", "595900000000", ""))
        self.assertIsNone(row["store_icon"])
        self.assertEqual(settings_from_row(row).store_name, "Mi Tienda")
