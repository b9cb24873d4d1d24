# pricing/views.py
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdmin, IsInternalStaff
from quotes.services import customer_can_see_breakdown, get_visible_quote, is_customer

from .api.errors import DomainErrorMixin
from .customer_view import project
from .models import QuotePricing
from .serializers import (
    AddChargeSerializer,
    ContainerBlockSerializer,
    InitPricingSerializer,
    LockSerializer,
    PricingStateSerializer,
    PricingTemplateLineSerializer,
    PricingTemplateSerializer,
    QuotePricingBlockSerializer,
    QuotePricingChargeSerializer,
    QuotePricingSerializer,
    TransferOwnershipSerializer,
    UpdateChargeSerializer,
)
from .services import pricing_service
from .services.errors import NotFound
from .services.lock_guard import get_quote, lock_pricing, unlock_pricing
from .services.snapshot import take_snapshot
from .services.totals import compute_ops_totals


def _pricing_for(quote_id) -> QuotePricing:
    pricing = (
        QuotePricing.objects
        .filter(quote_id=quote_id)
        .prefetch_related('blocks', 'charges')
        .first()
    )
    if pricing is None:
        raise NotFound("Pricing not initialized")
    return pricing


# ---- Catalog ----
class QuoteTemplatesView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def get(self, request, id):
        quote = get_quote(id)
        templates = pricing_service.list_templates(quote.shipment_mode)
        return Response({
            "mode": quote.shipment_mode,
            "templates": PricingTemplateSerializer(templates, many=True).data,
        })


class TemplateAddonsView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def get(self, request, code):
        addons = pricing_service.list_addons(code)
        return Response({
            "template_code": code,
            "addons": PricingTemplateLineSerializer(addons, many=True).data,
        })


# ---- Pricing state ----
class PricingDetailView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def get(self, request, id):
        return Response(QuotePricingSerializer(_pricing_for(id)).data)


class InitPricingView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def post(self, request, id):
        ser = InitPricingSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        pricing_service.initialize_pricing(id, user=request.user, **ser.validated_data)
        return Response(QuotePricingSerializer(_pricing_for(id)).data, status=status.HTTP_201_CREATED)


class ContainerBlockView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def post(self, request, id):
        ser = ContainerBlockSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        block = pricing_service.add_container_block(id, user=request.user, **ser.validated_data)
        data = QuotePricingBlockSerializer(block).data
        data["charges"] = QuotePricingChargeSerializer(block.charges.all(), many=True).data
        return Response(data, status=status.HTTP_201_CREATED)


class PricingBlocksView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def get(self, request, id):
        blocks = pricing_service.list_blocks(id)
        return Response(QuotePricingBlockSerializer(blocks, many=True).data)


class PricingChargesView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def post(self, request, id):
        ser = AddChargeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        charge = pricing_service.add_line(id, user=request.user, **ser.validated_data)
        return Response(QuotePricingChargeSerializer(charge).data, status=status.HTTP_201_CREATED)


class PricingChargeDetailView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def patch(self, request, id, charge_id):
        ser = UpdateChargeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        charge = pricing_service.update_charge(id, charge_id, user=request.user, **ser.validated_data)
        return Response(QuotePricingChargeSerializer(charge).data)

    def delete(self, request, id, charge_id):
        pricing_service.remove_line(id, charge_id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecalculatePricingView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def post(self, request, id):
        pricing_service.recalculate_pricing(id, user=request.user)
        return Response(QuotePricingSerializer(_pricing_for(id)).data)


class TransferOwnershipView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def post(self, request, id):
        ser = TransferOwnershipSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        pricing_service.attach_transfer_ownership(id, user=request.user, **ser.validated_data)
        return Response(QuotePricingSerializer(_pricing_for(id)).data, status=status.HTTP_201_CREATED)


# ---- Read views ----
class OpsView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def get(self, request, id):
        get_quote(id)
        _pricing_for(id)
        return Response(compute_ops_totals(id))


class CustomerView(DomainErrorMixin, APIView):
    """
    What the customer sees. Staff may pass ?preview=1 to see the breakdown
    regardless of the approval state.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        quote = get_visible_quote(id, request.user)
        pricing = QuotePricing.objects.filter(quote=quote).prefetch_related('blocks', 'charges').first()

        can_see_breakdown = customer_can_see_breakdown(quote)
        if not is_customer(request.user) and request.query_params.get("preview") in ("1", "true"):
            can_see_breakdown = True

        view = project(
            pricing,
            can_see_breakdown,
            hidden_codes=quote.hidden_breakdown_codes or [],
            currency_fallback=quote.currency,
        )
        return Response({
            "quote_id": quote.id,
            "reference": quote.reference,
            "exworks_breakdown_status": quote.exworks_breakdown_status,
            "pricing": view,
        })


# ---- Lock and snapshot ----
class SnapshotView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def post(self, request, id):
        quote = take_snapshot(id, request.user)
        data = PricingStateSerializer(quote).data
        data["pricing_snapshot"] = quote.pricing_snapshot
        return Response(data, status=status.HTTP_201_CREATED)


class LockPricingView(DomainErrorMixin, APIView):
    permission_classes = [IsInternalStaff]

    def post(self, request, id):
        ser = LockSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        quote = lock_pricing(id, ser.validated_data["reason"], request.user)
        return Response(PricingStateSerializer(quote).data)


class UnlockPricingView(DomainErrorMixin, APIView):
    permission_classes = [IsAdmin]

    def post(self, request, id):
        quote = unlock_pricing(id, request.user)
        return Response(PricingStateSerializer(quote).data)
