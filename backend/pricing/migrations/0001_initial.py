import django.db.models.deletion
from django.db import migrations, models

TEMPLATE_CODES = [
    ('AIR_EXPORT_LOCAL', 'Air Export Local'),
    ('AIR_EXPORT_FREEZONE', 'Air Export Freezone'),
    ('AIR_EXPORT_TRANSIT', 'Air Export Transit'),
    ('AIR_IMPORT_LOCAL_CLEARANCE', 'Air Import Local Clearance'),
    ('AIR_IMPORT_REEXPORT', 'Air Import Reexport'),
    ('SEA_TO_AIR', 'Sea To Air'),
    ('SEA_EXPORT_LOCAL', 'Sea Export Local'),
    ('SEA_EXPORT_FREEZONE', 'Sea Export Freezone'),
    ('SEA_EXPORT_TRANSIT', 'Sea Export Transit'),
    ('SEA_EXPORT_LCL', 'Sea Export Lcl'),
    ('SEA_IMPORT_LOCAL', 'Sea Import Local'),
    ('SEA_IMPORT_LCL', 'Sea Import Lcl'),
    ('AIR_EXPORT_TRANSFER_OWNERSHIP', 'Air Export Transfer Ownership'),
    ('AIR_IMPORT_TRANSFER_OWNERSHIP', 'Air Import Transfer Ownership'),
    ('SEA_EXPORT_TRANSFER_OWNERSHIP', 'Sea Export Transfer Ownership'),
    ('SEA_IMPORT_TRANSFER_OWNERSHIP', 'Sea Import Transfer Ownership'),
]
MODES = [('AIR', 'Air'), ('SEA', 'Sea')]
DIRECTIONS = [('EXPORT', 'Export'), ('IMPORT', 'Import')]
GROUPS = [
    ('MAIN', 'Main'),
    ('EXWORKS', 'Exworks'),
    ('CLEARANCE', 'Clearance'),
    ('IMPORT_CLEARANCE', 'Import clearance'),
    ('EXPORT_CLEARANCE', 'Export clearance'),
    ('TRANSFER_OWNERSHIP', 'Transfer of ownership'),
]
QTY_BASES = [
    ('SHIPMENT', 'Per shipment'),
    ('KG_ACTUAL', 'Per kg (actual)'),
    ('KG_CHARGEABLE_MAX', 'Per kg (chargeable)'),
    ('PIECE', 'Per piece'),
    ('CONTAINER', 'Per container'),
    ('CBM', 'Per CBM'),
]
CONTAINER_TYPES = [('C20', "20' container"), ('C40', "40' container")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('quotes', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PricingTemplate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(choices=TEMPLATE_CODES, max_length=64, unique=True)),
                ('name', models.CharField(max_length=255)),
                ('mode', models.CharField(choices=MODES, max_length=8)),
                ('direction', models.CharField(choices=DIRECTIONS, max_length=8)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'pricing_templates',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['mode', 'direction'], name='pricing_tpl_mode_dir_idx')],
            },
        ),
        migrations.CreateModel(
            name='PricingTemplateLine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=64)),
                ('label', models.CharField(max_length=255)),
                ('group', models.CharField(choices=GROUPS, max_length=32)),
                ('qty_basis', models.CharField(choices=QTY_BASES, default='SHIPMENT', max_length=32)),
                ('order', models.IntegerField(default=0)),
                ('is_default', models.BooleanField(default=False)),
                ('is_optional', models.BooleanField(default=True)),
                ('is_labelling', models.BooleanField(default=False)),
                ('is_discount', models.BooleanField(default=False)),
                ('can_be_negative', models.BooleanField(default=False)),
                ('is_repeatable', models.BooleanField(default=False)),
                ('template', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lines', to='pricing.pricingtemplate')),
            ],
            options={
                'db_table': 'pricing_template_lines',
                'ordering': ['order', 'id'],
                'unique_together': {('template', 'code')},
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('is_default', True), ('is_optional', True), _negated=True),
                        name='template_line_default_not_optional',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='QuotePricing',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('mode', models.CharField(choices=MODES, max_length=8)),
                ('direction', models.CharField(choices=DIRECTIONS, max_length=8)),
                ('template_code', models.CharField(choices=TEMPLATE_CODES, max_length=64)),
                ('currency', models.CharField(default='AED', max_length=3)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('quote', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='pricing', to='quotes.quotation')),
            ],
            options={
                'db_table': 'quote_pricing',
            },
        ),
        migrations.CreateModel(
            name='QuotePricingBlock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('container_type', models.CharField(choices=CONTAINER_TYPES, max_length=8)),
                ('container_qty', models.PositiveIntegerField()),
                ('is_addon', models.BooleanField(default=False)),
                ('order', models.IntegerField(default=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('pricing', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='blocks', to='pricing.quotepricing')),
            ],
            options={
                'db_table': 'quote_pricing_blocks',
                'ordering': ['order', 'id'],
                'unique_together': {('pricing', 'container_type')},
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('container_qty__gt', 0)), name='block_container_qty_positive'),
                ],
            },
        ),
        migrations.CreateModel(
            name='QuotePricingCharge',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=64)),
                ('label', models.CharField(max_length=255)),
                ('group', models.CharField(choices=GROUPS, max_length=32)),
                ('qty_basis', models.CharField(choices=QTY_BASES, max_length=32)),
                ('order', models.IntegerField(default=0)),
                ('buy_rate', models.DecimalField(decimal_places=4, default=0, max_digits=18)),
                ('sell_rate', models.DecimalField(decimal_places=4, default=0, max_digits=18)),
                ('qty', models.DecimalField(decimal_places=4, default=1, max_digits=18)),
                ('total_sell', models.DecimalField(decimal_places=2, default=0, max_digits=18)),
                ('margin', models.DecimalField(blank=True, decimal_places=2, max_digits=18, null=True)),
                ('is_labelling', models.BooleanField(default=False)),
                ('is_discount', models.BooleanField(default=False)),
                ('can_be_negative', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('block', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='charges', to='pricing.quotepricingblock')),
                ('pricing', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='charges', to='pricing.quotepricing')),
            ],
            options={
                'db_table': 'quote_pricing_charges',
                'ordering': ['order', 'id'],
                'indexes': [
                    models.Index(fields=['pricing', 'group'], name='pricing_charge_group_idx'),
                    models.Index(fields=['pricing', 'code'], name='pricing_charge_code_idx'),
                ],
            },
        ),
    ]
