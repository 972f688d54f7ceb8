# catalog/management/commands/seed_products.py

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from catalog.exceptions import StorageError
from catalog.repositories import get_product_repository
from catalog.types import Product

SAMPLE_PRODUCTS = [
    {
        "name": "Remera Oversize Algodón",
        "price": 4500,
        "original_price": 6000,
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=500",
        "images": [
            "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=500",
            "https://images.unsplash.com/photo-1583743814966-8936f37f4678?w=500",
        ],
        "description": "Remera oversize de algodón 100%, perfecta para un look casual y cómodo.",
        "category": "prendas",
        "subcategory": "remeras",
        "gender": "unisex",
        "sizes": ["S", "M", "L", "XL", "XXL"],
        "colors": ["Negro", "Blanco", "Gris", "Navy"],
        "material": "100% Algodón",
        "brand": "Urban Style",
        "rating": 4.5,
        "in_stock": True,
        "features": ["Oversize", "Algodón suave", "Unisex"],
        "tags": ["casual", "cómoda", "básica", "algodón"],
    },
    {
        "name": "Jean Skinny Mujer",
        "price": 8500,
        "original_price": 12000,
        "image": "https://images.unsplash.com/photo-1541099649105-f69ad21f3246?w=500",
        "images": [
            "https://images.unsplash.com/photo-1541099649105-f69ad21f3246?w=500",
        ],
        "description": "Jean skinny de tiro alto con elastano para mayor comodidad.",
        "category": "prendas",
        "subcategory": "jeans",
        "gender": "mujer",
        "sizes": ["26", "28", "30", "32", "34"],
        "colors": ["Azul Claro", "Azul Oscuro", "Negro"],
        "material": "98% Algodón, 2% Elastano",
        "brand": "Denim Co",
        "rating": 4.7,
        "in_stock": True,
        "features": ["Tiro alto", "Elastizado", "Corte skinny"],
        "tags": ["jean", "skinny", "mujer", "denim"],
    },
    {
        "name": "Zapatillas Running Deportivas",
        "price": 12000,
        "original_price": 15000,
        "image": "https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=500",
        "images": [
            "https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=500",
        ],
        "description": "Zapatillas livianas para running con suela amortiguada.",
        "category": "calzados",
        "subcategory": "zapatillas",
        "gender": "unisex",
        "sizes": ["38", "39", "40", "41", "42", "43", "44"],
        "colors": ["Rojo", "Negro", "Blanco"],
        "material": "Mesh transpirable",
        "brand": "RunTech",
        "rating": 4.9,
        "in_stock": True,
        "features": ["Amortiguación", "Liviana", "Transpirable"],
        "tags": ["running", "deporte", "zapatillas"],
    },
]


class Command(BaseCommand):
    help = "Seed sample catalog products (skips names that already exist)"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding products..."))

        repository = get_product_repository()

        try:
            existing = {p.name for p in repository.fetch_all()}
            created = 0
            for data in SAMPLE_PRODUCTS:
                if data["name"] in existing:
                    self.stdout.write(f"- {data['name']} already exists, skipping")
                    continue
                repository.create(Product.from_data(data))
                created += 1
        except StorageError as exc:
            raise CommandError(f"Seeding failed: {exc}") from exc

        self.stdout.write(
            self.style.SUCCESS(f"✅ Products seeded successfully ({created} created).")
        )
