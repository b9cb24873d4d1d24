from __future__ import annotations

from rest_framework import serializers

from pricing.models import QuotePricing

from .models import Quotation
from .packages import calc_from_packages

PHYSICAL_FIELDS = (
    "weight_kg", "chargeable_weight_kg", "pieces", "volume_cbm",
    "length_cm", "width_cm", "height_cm", "packages",
)


# ---------- PACKAGES (write-only rows, summed onto the quote) ----------
class PackageSerializer(serializers.Serializer):
    qty = serializers.IntegerField(min_value=0)
    length = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    width = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    height = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    unit = serializers.ChoiceField(choices=["cm", "in", "mm", "m"], default="cm")


# ---------- QUOTATION ----------
class QuotationSerializer(serializers.ModelSerializer):
    packages = PackageSerializer(many=True, required=False)
    is_pricing_locked = serializers.BooleanField(read_only=True)

    class Meta:
        model = Quotation
        fields = [
            "id", "reference", "customer", "shipment_mode", "status", "notes",
            "weight_kg", "chargeable_weight_kg", "pieces", "volume_cbm",
            "length_cm", "width_cm", "height_cm", "packages",
            "exworks_breakdown_status", "show_exworks_breakdown", "hidden_breakdown_codes",
            "is_pricing_locked", "pricing_locked_at", "pricing_lock_reason",
            "pricing_version", "priced_at", "total_price", "currency",
            "sent_at", "booked_at", "created_at", "updated_at",
        ]
        read_only_fields = (
            "status",
            "exworks_breakdown_status", "show_exworks_breakdown", "hidden_breakdown_codes",
            "pricing_locked_at", "pricing_lock_reason",
            "pricing_version", "priced_at", "total_price", "currency",
            "sent_at", "booked_at", "created_at", "updated_at",
        )

    def validate_shipment_mode(self, value):
        # Priced quotes keep the mode their template was chosen for
        if self.instance is not None and value != self.instance.shipment_mode:
            if QuotePricing.objects.filter(quote=self.instance).exists():
                raise serializers.ValidationError(
                    "Shipment mode cannot change once pricing exists"
                )
        return value

    def validate(self, attrs):
        # Package rows override the totals they imply
        packages = attrs.get("packages")
        if packages:
            pieces, volume_cbm, chargeable = calc_from_packages(packages)
            if pieces:
                attrs["pieces"] = pieces
                attrs["volume_cbm"] = volume_cbm
                attrs["chargeable_weight_kg"] = chargeable
        if packages is not None:
            attrs["packages"] = [
                {**p, "length": str(p["length"]), "width": str(p["width"]), "height": str(p["height"])}
                for p in packages
            ]
        return attrs

    def create(self, validated_data):
        return Quotation.objects.create(**validated_data)

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance
