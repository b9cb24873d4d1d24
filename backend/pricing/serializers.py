from rest_framework import serializers

from quotes.models import Quotation

from .models import PricingTemplate, PricingTemplateLine, QuotePricing, QuotePricingBlock, QuotePricingCharge


# ---------- CATALOG ----------
class PricingTemplateSerializer(serializers.ModelSerializer):
    class Meta:
        model = PricingTemplate
        fields = ["code", "name", "mode", "direction"]


class PricingTemplateLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = PricingTemplateLine
        fields = [
            "code", "label", "group", "qty_basis", "order",
            "is_default", "is_optional", "is_labelling", "is_discount", "can_be_negative", "is_repeatable",
        ]


# ---------- QUOTE PRICING ----------
class QuotePricingBlockSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuotePricingBlock
        fields = ["id", "container_type", "container_qty", "is_addon", "order"]


class QuotePricingChargeSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuotePricingCharge
        fields = [
            "id", "block", "code", "label", "group", "qty_basis", "order",
            "buy_rate", "sell_rate", "qty", "total_sell", "margin",
            "is_labelling", "is_discount", "can_be_negative",
        ]


class QuotePricingSerializer(serializers.ModelSerializer):
    blocks = QuotePricingBlockSerializer(many=True, read_only=True)
    charges = QuotePricingChargeSerializer(many=True, read_only=True)

    class Meta:
        model = QuotePricing
        fields = ["id", "quote", "mode", "direction", "template_code", "currency", "blocks", "charges", "updated_at"]


class PricingStateSerializer(serializers.ModelSerializer):
    """Lock and snapshot state of a quote."""
    class Meta:
        model = Quotation
        fields = [
            "id", "reference", "status",
            "pricing_locked_at", "pricing_locked_by", "pricing_lock_reason",
            "pricing_version", "priced_at", "total_price", "currency",
        ]


# ---------- REQUEST BODIES ----------
class InitPricingSerializer(serializers.Serializer):
    template_code = serializers.CharField()
    currency = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    container_type = serializers.CharField(required=False, allow_null=True)
    container_qty = serializers.IntegerField(required=False, allow_null=True)


class ContainerBlockSerializer(serializers.Serializer):
    container_type = serializers.CharField()
    container_qty = serializers.IntegerField()


class AddChargeSerializer(serializers.Serializer):
    line_code = serializers.CharField()
    block_id = serializers.IntegerField(required=False, allow_null=True)


class UpdateChargeSerializer(serializers.Serializer):
    buy_rate = serializers.DecimalField(max_digits=18, decimal_places=4, required=False, allow_null=True)
    sell_rate = serializers.DecimalField(max_digits=18, decimal_places=4, required=False, allow_null=True)


class TransferOwnershipSerializer(serializers.Serializer):
    direction = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class LockSerializer(serializers.Serializer):
    reason = serializers.CharField()
