# catalog/urls.py

"""
CATALOG URLS

Mounted under /api/ (backend/urls.py). Paths match the storefront frontend,
which calls them without a trailing slash; a trailing slash is tolerated.

- /api/products
- /api/products/<id>
- /api/settings
"""

from django.urls import re_path

from catalog.views import ProductDetailView, ProductListView, StoreSettingsView

urlpatterns = [
    re_path(r"^products/?$", ProductListView.as_view(), name="product-list"),
    re_path(
        r"^products/(?P<product_id>[^/]+)/?$",
        ProductDetailView.as_view(),
        name="product-detail",
    ),
    re_path(r"^settings/?$", StoreSettingsView.as_view(), name="store-settings"),
]
