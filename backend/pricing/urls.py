from django.urls import path

from .views import (
    ContainerBlockView,
    CustomerView,
    InitPricingView,
    LockPricingView,
    OpsView,
    PricingBlocksView,
    PricingChargeDetailView,
    PricingChargesView,
    PricingDetailView,
    QuoteTemplatesView,
    RecalculatePricingView,
    SnapshotView,
    TemplateAddonsView,
    TransferOwnershipView,
    UnlockPricingView,
)

app_name = 'pricing'

urlpatterns = [
    path('pricing/templates/<str:code>/addons/', TemplateAddonsView.as_view(), name='template-addons'),
    path('quotes/<int:id>/pricing/', PricingDetailView.as_view(), name='pricing-detail'),
    path('quotes/<int:id>/pricing/templates/', QuoteTemplatesView.as_view(), name='quote-templates'),
    path('quotes/<int:id>/pricing/init/', InitPricingView.as_view(), name='pricing-init'),
    path('quotes/<int:id>/pricing/sea-addon/', ContainerBlockView.as_view(), name='pricing-sea-addon'),
    path('quotes/<int:id>/pricing/blocks/', PricingBlocksView.as_view(), name='pricing-blocks'),
    path('quotes/<int:id>/pricing/charges/', PricingChargesView.as_view(), name='pricing-charges'),
    path(
        'quotes/<int:id>/pricing/charges/<int:charge_id>/',
        PricingChargeDetailView.as_view(),
        name='pricing-charge-detail',
    ),
    path('quotes/<int:id>/pricing/recalculate/', RecalculatePricingView.as_view(), name='pricing-recalculate'),
    path(
        'quotes/<int:id>/pricing/add-transfer-ownership/',
        TransferOwnershipView.as_view(),
        name='pricing-transfer-ownership',
    ),
    path('quotes/<int:id>/pricing/ops/', OpsView.as_view(), name='pricing-ops'),
    path('quotes/<int:id>/pricing/customer-view/', CustomerView.as_view(), name='pricing-customer-view'),
    path('quotes/<int:id>/pricing/snapshot/', SnapshotView.as_view(), name='pricing-snapshot'),
    path('quotes/<int:id>/pricing/lock/', LockPricingView.as_view(), name='pricing-lock'),
    path('quotes/<int:id>/pricing/unlock/', UnlockPricingView.as_view(), name='pricing-unlock'),
]
