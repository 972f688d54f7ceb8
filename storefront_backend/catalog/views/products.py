# catalog/views/products.py

"""
PRODUCT ENDPOINTS

GET    /api/products             list (filters: category, gender, size, q, in_stock)
POST   /api/products             create
GET    /api/products/<id>        detail
PUT    /api/products/<id>        full update
DELETE /api/products/<id>        delete

Errors are {"error": "..."}:
- 400 invalid id / missing or invalid fields
- 404 unknown product
- 500 storage backend failure
"""

from __future__ import annotations

import logging
from typing import Optional

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.exceptions import StorageError
from catalog.filters import filters_from_query
from catalog.repositories import get_product_repository
from catalog.serializers import (
    ProductCreateSerializer,
    ProductSerializer,
    ProductWriteSerializer,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "price", "description")


def _error(message: str, code: int) -> Response:
    return Response({"error": message}, status=code)


def _parse_id(raw) -> Optional[int]:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def _missing_fields(data) -> list[str]:
    missing = []
    for name in REQUIRED_FIELDS:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def _validated_product(request, serializer_class):
    """
    Returns (product, None) or (None, error Response).
    """
    if not isinstance(request.data, dict):
        return None, _error("Request body must be a JSON object", status.HTTP_400_BAD_REQUEST)

    missing = _missing_fields(request.data)
    if missing:
        return None, _error(
            "Missing required fields: " + ", ".join(REQUIRED_FIELDS),
            status.HTTP_400_BAD_REQUEST,
        )

    serializer = serializer_class(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.to_product(), None


_FILTER_PARAMS = [
    OpenApiParameter(name="category", type=str, location=OpenApiParameter.QUERY, required=False),
    OpenApiParameter(name="gender", type=str, location=OpenApiParameter.QUERY, required=False),
    OpenApiParameter(name="size", type=str, location=OpenApiParameter.QUERY, required=False),
    OpenApiParameter(
        name="q",
        type=str,
        location=OpenApiParameter.QUERY,
        required=False,
        description="Search in name, description, subcategory, brand and tags.",
    ),
    OpenApiParameter(name="in_stock", type=bool, location=OpenApiParameter.QUERY, required=False),
]


class ProductListView(APIView):
    """
    GET  /api/products
    POST /api/products
    """

    @extend_schema(
        tags=["Products"],
        parameters=_FILTER_PARAMS,
        responses={200: ProductSerializer(many=True), 500: OpenApiResponse(description="Storage failure")},
        description="List products, newest first.",
    )
    def get(self, request):
        filters = filters_from_query(request.query_params)
        try:
            products = get_product_repository().list(filters)
        except StorageError:
            logger.exception("Error fetching products")
            return _error("Failed to fetch products", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(
        tags=["Products"],
        request=ProductCreateSerializer,
        responses={
            201: ProductSerializer,
            400: OpenApiResponse(description="Missing or invalid fields"),
            500: OpenApiResponse(description="Storage failure"),
        },
    )
    def post(self, request):
        product, error = _validated_product(request, ProductCreateSerializer)
        if error is not None:
            return error

        try:
            created = get_product_repository().create(product)
        except StorageError:
            logger.exception("Error creating product")
            return _error("Failed to create product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(ProductSerializer(created).data, status=status.HTTP_201_CREATED)


class ProductDetailView(APIView):
    """
    GET    /api/products/<id>
    PUT    /api/products/<id>
    DELETE /api/products/<id>
    """

    @extend_schema(
        tags=["Products"],
        responses={
            200: ProductSerializer,
            400: OpenApiResponse(description="Invalid product ID"),
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def get(self, request, product_id):
        pk = _parse_id(product_id)
        if pk is None:
            return _error("Invalid product ID", status.HTTP_400_BAD_REQUEST)

        try:
            product = get_product_repository().get(pk)
        except StorageError:
            logger.exception("Error fetching product", extra={"product_id": pk})
            return _error("Failed to fetch product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        if product is None:
            return _error("Product not found", status.HTTP_404_NOT_FOUND)

        return Response(ProductSerializer(product).data)

    @extend_schema(
        tags=["Products"],
        request=ProductWriteSerializer,
        responses={
            200: ProductSerializer,
            400: OpenApiResponse(description="Invalid ID or fields"),
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def put(self, request, product_id):
        pk = _parse_id(product_id)
        if pk is None:
            return _error("Invalid product ID", status.HTTP_400_BAD_REQUEST)

        product, error = _validated_product(request, ProductWriteSerializer)
        if error is not None:
            return error

        try:
            updated = get_product_repository().update(pk, product)
        except StorageError:
            logger.exception("Error updating product", extra={"product_id": pk})
            return _error("Failed to update product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        if updated is None:
            return _error("Product not found", status.HTTP_404_NOT_FOUND)

        return Response(ProductSerializer(updated).data)

    @extend_schema(
        tags=["Products"],
        responses={
            200: OpenApiResponse(description="Product deleted"),
            400: OpenApiResponse(description="Invalid product ID"),
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def delete(self, request, product_id):
        pk = _parse_id(product_id)
        if pk is None:
            return _error("Invalid product ID", status.HTTP_400_BAD_REQUEST)

        try:
            deleted = get_product_repository().delete(pk)
        except StorageError:
            logger.exception("Error deleting product", extra={"product_id": pk})
            return _error("Failed to delete product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        if not deleted:
            return _error("Product not found", status.HTTP_404_NOT_FOUND)

        return Response({"message": "Product deleted successfully"})
