from django.contrib import admin

from .models import Quotation


@admin.register(Quotation)
class QuotationAdmin(admin.ModelAdmin):
    list_display = (
        "reference", "customer", "shipment_mode", "status", "exworks_breakdown_status",
        "pricing_version", "total_price", "currency", "pricing_locked_at", "created_at",
    )
    search_fields = ("reference", "customer__username")
    list_filter = ("status", "shipment_mode", "exworks_breakdown_status", "currency", "created_at")
    date_hierarchy = "created_at"
    readonly_fields = ("pricing_snapshot", "pricing_version", "priced_at", "priced_by", "created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        ro = list(super().get_readonly_fields(request, obj))
        if obj and obj.pricing_locked_at and getattr(request.user, "role", None) != "ADMIN":
            # lock the whole form
            for f in obj._meta.fields:
                if f.name not in ro:
                    ro.append(f.name)
        return ro
