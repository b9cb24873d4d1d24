import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Quotation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference', models.CharField(max_length=64, unique=True)),
                ('shipment_mode', models.CharField(choices=[('AIR', 'Air'), ('SEA', 'Sea')], max_length=8)),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('PRICED', 'Priced'), ('SENT', 'Sent'), ('BOOKED', 'Booked'), ('CANCELLED', 'Cancelled')], default='DRAFT', max_length=20)),
                ('notes', models.TextField(blank=True, null=True)),
                ('weight_kg', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ('chargeable_weight_kg', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ('pieces', models.PositiveIntegerField(blank=True, null=True)),
                ('volume_cbm', models.DecimalField(blank=True, decimal_places=4, max_digits=12, null=True)),
                ('length_cm', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('width_cm', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('height_cm', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('packages', models.JSONField(blank=True, default=list)),
                ('exworks_breakdown_status', models.CharField(choices=[('NONE', 'Not requested'), ('REQUESTED', 'Requested'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected')], default='NONE', max_length=16)),
                ('show_exworks_breakdown', models.BooleanField(default=False)),
                ('hidden_breakdown_codes', models.JSONField(blank=True, default=list)),
                ('pricing_locked_at', models.DateTimeField(blank=True, null=True)),
                ('pricing_lock_reason', models.CharField(blank=True, max_length=255, null=True)),
                ('pricing_snapshot', models.JSONField(blank=True, null=True)),
                ('pricing_version', models.PositiveIntegerField(default=0)),
                ('priced_at', models.DateTimeField(blank=True, null=True)),
                ('total_price', models.DecimalField(blank=True, decimal_places=2, max_digits=18, null=True)),
                ('currency', models.CharField(default='AED', max_length=3)),
                ('sent_at', models.DateTimeField(blank=True, null=True)),
                ('booked_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('customer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quotations', to=settings.AUTH_USER_MODEL)),
                ('pricing_locked_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('priced_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['customer', '-created_at'], name='quote_customer_created_idx'),
                    models.Index(fields=['status'], name='quote_status_idx'),
                ],
            },
        ),
    ]
