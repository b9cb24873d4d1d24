from django.conf import settings
from django.db import models


class Quotation(models.Model):
    MODE_CHOICES = [('AIR', 'Air'), ('SEA', 'Sea')]
    STATUS_CHOICES = [
        ('DRAFT', 'Draft'),
        ('PRICED', 'Priced'),
        ('SENT', 'Sent'),
        ('BOOKED', 'Booked'),
        ('CANCELLED', 'Cancelled'),
    ]
    BREAKDOWN_STATUS_CHOICES = [
        ('NONE', 'Not requested'),
        ('REQUESTED', 'Requested'),
        ('APPROVED', 'Approved'),
        ('REJECTED', 'Rejected'),
    ]

    reference = models.CharField(max_length=64, unique=True)
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='quotations'
    )
    shipment_mode = models.CharField(max_length=8, choices=MODE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='DRAFT')
    notes = models.TextField(blank=True, null=True)

    # Physical attributes, re-read on every rate edit
    weight_kg = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    chargeable_weight_kg = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    pieces = models.PositiveIntegerField(null=True, blank=True)
    volume_cbm = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    length_cm = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    width_cm = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    height_cm = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    packages = models.JSONField(default=list, blank=True)

    # Customer breakdown gate
    exworks_breakdown_status = models.CharField(max_length=16, choices=BREAKDOWN_STATUS_CHOICES, default='NONE')
    show_exworks_breakdown = models.BooleanField(default=False)
    hidden_breakdown_codes = models.JSONField(default=list, blank=True)

    # Pricing lock
    pricing_locked_at = models.DateTimeField(null=True, blank=True)
    pricing_locked_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    pricing_lock_reason = models.CharField(max_length=255, blank=True, null=True)

    # Snapshot
    pricing_snapshot = models.JSONField(null=True, blank=True)
    pricing_version = models.PositiveIntegerField(default=0)
    priced_at = models.DateTimeField(null=True, blank=True)
    priced_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    total_price = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, default='AED')

    sent_at = models.DateTimeField(null=True, blank=True)
    booked_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['customer', '-created_at'], name='quote_customer_created_idx'),
            models.Index(fields=['status'], name='quote_status_idx'),
        ]

    @property
    def is_pricing_locked(self) -> bool:
        return self.pricing_locked_at is not None

    def __str__(self):
        return self.reference
