# catalog/serializers/product.py

"""
PRODUCT SERIALIZERS

Wire format is camelCase (the storefront is a JS app):
    originalPrice, inStock, createdAt, updatedAt

- ProductSerializer: output, from catalog.types.Product
- ProductWriteSerializer: input validation for PUT; validated_data is
  snake_case and feeds Product.from_data()
- ProductCreateSerializer: POST variant, category optional
"""

from django.conf import settings
from rest_framework import serializers

from catalog.types import Product

# Keys dropped from the output when empty (the frontend treats missing as unset)
OPTIONAL_OUTPUT_KEYS = ("originalPrice", "gender", "material", "brand")


class ProductSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField()
    price = serializers.FloatField()
    originalPrice = serializers.FloatField(source="original_price", allow_null=True)
    image = serializers.CharField()
    images = serializers.ListField(child=serializers.CharField())
    description = serializers.CharField()
    category = serializers.CharField()
    subcategory = serializers.CharField()
    gender = serializers.CharField(allow_null=True)
    sizes = serializers.ListField(child=serializers.CharField())
    colors = serializers.ListField(child=serializers.CharField())
    material = serializers.CharField(allow_blank=True)
    brand = serializers.CharField(allow_blank=True)
    rating = serializers.FloatField()
    inStock = serializers.BooleanField(source="in_stock")
    features = serializers.ListField(child=serializers.CharField())
    tags = serializers.ListField(child=serializers.CharField())
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True)
    updatedAt = serializers.DateTimeField(source="updated_at", allow_null=True)

    def to_representation(self, instance: Product):
        data = super().to_representation(instance)
        for key in OPTIONAL_OUTPUT_KEYS:
            if data.get(key) in (None, ""):
                data.pop(key, None)
        return data


class ProductWriteSerializer(serializers.Serializer):
    """
    Validation rules:
    - name, price, description required (checked by the view first so the
      error message lists all of them)
    - category must be one of settings.STORE_CATEGORIES
    - gender, if present, one of settings.STORE_GENDERS
    - sizes / colors must be arrays; missing sizes become []
    """

    name = serializers.CharField(max_length=255)
    price = serializers.FloatField(min_value=0)
    description = serializers.CharField()
    originalPrice = serializers.FloatField(
        source="original_price", required=False, allow_null=True, min_value=0
    )
    image = serializers.CharField(required=False, allow_blank=True, default="")
    images = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    category = serializers.CharField(max_length=64)
    subcategory = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=128
    )
    gender = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    sizes = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        default=list,
        error_messages={"not_a_list": "Sizes must be an array"},
    )
    colors = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        default=list,
        error_messages={"not_a_list": "Colors must be an array"},
    )
    material = serializers.CharField(required=False, allow_blank=True, default="")
    brand = serializers.CharField(required=False, allow_blank=True, default="")
    rating = serializers.FloatField(required=False, default=0.0, min_value=0, max_value=5)
    inStock = serializers.BooleanField(source="in_stock", required=False, default=True)
    features = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    tags = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_category(self, value):
        value = (value or "").strip().lower()
        allowed = list(settings.STORE_CATEGORIES)
        if value not in allowed:
            raise serializers.ValidationError(
                "Invalid category. Must be one of: " + ", ".join(allowed)
            )
        return value

    def validate_gender(self, value):
        value = (value or "").strip().lower()
        if not value:
            return None
        allowed = list(settings.STORE_GENDERS)
        if value not in allowed:
            raise serializers.ValidationError(
                "Invalid gender. Must be one of: " + ", ".join(allowed)
            )
        return value

    def validate(self, attrs):
        if attrs.get("original_price") == 0:
            attrs["original_price"] = None
        return attrs

    def to_product(self) -> Product:
        return Product.from_data(dict(self.validated_data))


class ProductCreateSerializer(ProductWriteSerializer):
    """
    POST rules: category may be omitted or blank (stored as ""). A category
    that is given must still be one of settings.STORE_CATEGORIES.
    """

    category = serializers.CharField(
        max_length=64, required=False, allow_blank=True, default=""
    )

    def validate_category(self, value):
        if not (value or "").strip():
            return ""
        return super().validate_category(value)
