# catalog/serializers/__init__.py

from .product import ProductCreateSerializer, ProductSerializer, ProductWriteSerializer
from .settings import StoreSettingsSerializer

__all__ = [
    "ProductCreateSerializer",
    "ProductSerializer",
    "ProductWriteSerializer",
    "StoreSettingsSerializer",
]
