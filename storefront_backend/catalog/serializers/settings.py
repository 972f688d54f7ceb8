# catalog/serializers/settings.py

from rest_framework import serializers

from catalog.types import StoreSettings


class StoreSettingsSerializer(serializers.Serializer):
    storeName = serializers.CharField(source="store_name", max_length=255)
    whatsappNumber = serializers.CharField(source="whatsapp_number", max_length=32)
    storeIcon = serializers.CharField(
        source="store_icon",
        required=False,
        allow_null=True,
        allow_blank=True,
        max_length=1024,
    )

    def validate_storeName(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Store name is required")
        return value

    def validate_whatsappNumber(self, value):
        # wa.me links want digits only: "+595 981 234-567" -> "595981234567"
        digits = "".join(ch for ch in (value or "") if ch.isdigit())
        if len(digits) < 6:
            raise serializers.ValidationError("WhatsApp number must contain at least 6 digits")
        return digits

    def to_representation(self, instance: StoreSettings):
        data = super().to_representation(instance)
        if not data.get("storeIcon"):
            data.pop("storeIcon", None)
        return data

    def to_settings(self) -> StoreSettings:
        data = self.validated_data
        return StoreSettings(
            store_name=data["store_name"],
            whatsapp_number=data["whatsapp_number"],
            store_icon=data.get("store_icon") or None,
        )
