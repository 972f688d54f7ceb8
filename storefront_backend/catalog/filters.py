# catalog/filters.py

"""
STOREFRONT FILTERS

Applied in Python after the repository fetch so MySQL and Supabase filter
identically (the catalog is small: tens to hundreds of products).

Query params:
- category=<slug> ("all" disables the filter)
- gender=hombre|mujer|unisex ("all" disables the filter)
- size=<size label>
- q=<text>  matches name, description, subcategory, brand, tags
- in_stock=true|false
"""

from __future__ import annotations

from typing import Iterable

from catalog.types import Product, ProductFilters

_TRUE = ("1", "true", "yes")
_FALSE = ("0", "false", "no")


def filters_from_query(params) -> ProductFilters:
    def _param(name):
        value = (params.get(name) or "").strip()
        if not value or value.lower() == "all":
            return None
        return value

    raw_stock = (params.get("in_stock") or "").strip().lower()
    in_stock = True if raw_stock in _TRUE else False if raw_stock in _FALSE else None

    return ProductFilters(
        category=_param("category"),
        gender=_param("gender"),
        size=_param("size"),
        q=_param("q"),
        in_stock=in_stock,
    )


def _matches_search(product: Product, term: str) -> bool:
    term = term.lower()
    haystack = [
        product.name,
        product.description,
        product.subcategory,
        product.brand,
        *product.tags,
    ]
    return any(term in str(value or "").lower() for value in haystack)


def filter_products(products: Iterable[Product], filters: ProductFilters) -> list[Product]:
    if filters.is_empty:
        return list(products)

    result = []
    for product in products:
        if filters.category and product.category.lower() != filters.category.lower():
            continue
        if filters.gender and (product.gender or "").lower() != filters.gender.lower():
            continue
        if filters.size and filters.size not in (product.sizes or []):
            continue
        if filters.in_stock is not None and product.in_stock != filters.in_stock:
            continue
        if filters.q and not _matches_search(product, filters.q):
            continue
        result.append(product)
    return result
