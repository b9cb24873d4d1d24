from django.contrib import admin, messages

from pricing.models import (
    PricingTemplate,
    PricingTemplateLine,
    QuotePricing,
    QuotePricingBlock,
    QuotePricingCharge,
)
from pricing.services.catalog import load_catalog_config, validate_catalog_config


class PricingTemplateLineInline(admin.TabularInline):
    model = PricingTemplateLine
    extra = 0
    fields = (
        "order", "code", "label", "group", "qty_basis",
        "is_default", "is_optional", "is_labelling", "is_discount", "can_be_negative", "is_repeatable",
    )


@admin.register(PricingTemplate)
class PricingTemplateAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "mode", "direction", "updated_at")
    list_filter = ("mode", "direction")
    search_fields = ("code", "name")
    inlines = [PricingTemplateLineInline]
    actions = ["validate_catalog"]

    def validate_catalog(self, request, queryset):
        errors = validate_catalog_config(load_catalog_config())
        for error in errors:
            messages.warning(request, error)
        if not errors:
            messages.info(request, "Template catalog configuration is valid.")

    validate_catalog.short_description = "Validate template catalog configuration"


@admin.register(PricingTemplateLine)
class PricingTemplateLineAdmin(admin.ModelAdmin):
    list_display = ("id", "template", "code", "label", "group", "qty_basis", "is_default", "is_optional")
    list_filter = ("group", "qty_basis", "is_default", "is_optional", "template")
    search_fields = ("code", "label")


class QuotePricingBlockInline(admin.TabularInline):
    model = QuotePricingBlock
    extra = 0


@admin.register(QuotePricing)
class QuotePricingAdmin(admin.ModelAdmin):
    list_display = ("id", "quote", "template_code", "mode", "direction", "currency", "updated_at")
    list_filter = ("template_code", "mode", "direction", "currency")
    search_fields = ("quote__reference",)
    inlines = [QuotePricingBlockInline]


@admin.register(QuotePricingCharge)
class QuotePricingChargeAdmin(admin.ModelAdmin):
    list_display = ("id", "pricing", "block", "code", "label", "group", "qty", "sell_rate", "total_sell", "margin")
    list_filter = ("group", "qty_basis")
    search_fields = ("pricing__quote__reference", "code", "label")
