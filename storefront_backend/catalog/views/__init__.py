# catalog/views/__init__.py

"""
Catalog views package exports (used by catalog/urls.py).
"""

from .products import ProductDetailView, ProductListView
from .settings import StoreSettingsView

__all__ = [
    "ProductDetailView",
    "ProductListView",
    "StoreSettingsView",
]
