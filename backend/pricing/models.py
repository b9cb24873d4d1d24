from django.db import models

from .types import ChargeGroup, ContainerType, QtyBasis, ShipmentMode, TemplateCode, TradeDirection


class PricingTemplate(models.Model):
    code = models.CharField(max_length=64, unique=True, choices=TemplateCode.choices)
    name = models.CharField(max_length=255)
    mode = models.CharField(max_length=8, choices=ShipmentMode.choices)
    direction = models.CharField(max_length=8, choices=TradeDirection.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pricing_templates'
        ordering = ['name']
        indexes = [
            models.Index(fields=['mode', 'direction'], name='pricing_tpl_mode_dir_idx'),
        ]

    def __str__(self):
        return f"{self.code} ({self.name})"


class PricingTemplateLine(models.Model):
    template = models.ForeignKey(PricingTemplate, on_delete=models.CASCADE, related_name='lines')
    code = models.CharField(max_length=64)
    label = models.CharField(max_length=255)
    group = models.CharField(max_length=32, choices=ChargeGroup.choices)
    qty_basis = models.CharField(max_length=32, choices=QtyBasis.choices, default=QtyBasis.SHIPMENT)
    order = models.IntegerField(default=0)
    is_default = models.BooleanField(default=False)
    is_optional = models.BooleanField(default=True)
    is_labelling = models.BooleanField(default=False)
    is_discount = models.BooleanField(default=False)
    can_be_negative = models.BooleanField(default=False)
    # May be added several times to the same pricing, each instance numbered
    is_repeatable = models.BooleanField(default=False)

    class Meta:
        db_table = 'pricing_template_lines'
        ordering = ['order', 'id']
        unique_together = (('template', 'code'),)
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(is_default=True, is_optional=True),
                name='template_line_default_not_optional',
            ),
        ]

    def __str__(self):
        return f"{self.template.code}:{self.code}"


class QuotePricing(models.Model):
    quote = models.OneToOneField('quotes.Quotation', on_delete=models.CASCADE, related_name='pricing')
    mode = models.CharField(max_length=8, choices=ShipmentMode.choices)
    direction = models.CharField(max_length=8, choices=TradeDirection.choices)
    template_code = models.CharField(max_length=64, choices=TemplateCode.choices)
    currency = models.CharField(max_length=3, default='AED')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'quote_pricing'

    def __str__(self):
        return f"{self.quote_id}:{self.template_code}"


class QuotePricingBlock(models.Model):
    pricing = models.ForeignKey(QuotePricing, on_delete=models.CASCADE, related_name='blocks')
    container_type = models.CharField(max_length=8, choices=ContainerType.choices)
    container_qty = models.PositiveIntegerField()
    is_addon = models.BooleanField(default=False)
    order = models.IntegerField(default=10)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'quote_pricing_blocks'
        ordering = ['order', 'id']
        unique_together = (('pricing', 'container_type'),)
        constraints = [
            models.CheckConstraint(condition=models.Q(container_qty__gt=0), name='block_container_qty_positive'),
        ]

    def __str__(self):
        return f"{self.container_type} x {self.container_qty}"


class QuotePricingCharge(models.Model):
    pricing = models.ForeignKey(QuotePricing, on_delete=models.CASCADE, related_name='charges')
    block = models.ForeignKey(
        QuotePricingBlock, null=True, blank=True, on_delete=models.CASCADE, related_name='charges'
    )
    code = models.CharField(max_length=64)
    label = models.CharField(max_length=255)
    group = models.CharField(max_length=32, choices=ChargeGroup.choices)
    qty_basis = models.CharField(max_length=32, choices=QtyBasis.choices)
    order = models.IntegerField(default=0)

    buy_rate = models.DecimalField(max_digits=18, decimal_places=4, default=0)
    sell_rate = models.DecimalField(max_digits=18, decimal_places=4, default=0)
    qty = models.DecimalField(max_digits=18, decimal_places=4, default=1)
    total_sell = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    margin = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)

    is_labelling = models.BooleanField(default=False)
    is_discount = models.BooleanField(default=False)
    can_be_negative = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'quote_pricing_charges'
        ordering = ['order', 'id']
        indexes = [
            models.Index(fields=['pricing', 'group'], name='pricing_charge_group_idx'),
            models.Index(fields=['pricing', 'code'], name='pricing_charge_code_idx'),
        ]

    def __str__(self):
        return f"{self.code} ({self.label})"
