# quotes/views.py
from django.db import transaction
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsCustomer, IsInternalStaff
from pricing.api.errors import DomainErrorMixin
from pricing.models import QuotePricing
from pricing.services.pricing_service import recalculate_pricing

from . import services
from .serializers import PHYSICAL_FIELDS, QuotationSerializer


class BreakdownDecisionSerializer(serializers.Serializer):
    approved = serializers.BooleanField(allow_null=True, default=None)
    show = serializers.BooleanField(allow_null=True, default=None)
    hidden_codes = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)


# ---- ViewSet for the quote envelope ----
class QuotationViewSet(DomainErrorMixin, viewsets.ModelViewSet):
    serializer_class = QuotationSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def get_queryset(self):
        return services.visible_quotes(self.request.user).order_by('-created_at')

    def perform_create(self, serializer):
        # Customers always quote for themselves
        if services.is_customer(self.request.user):
            serializer.save(customer=self.request.user)
        else:
            serializer.save()

    def perform_update(self, serializer):
        physical_changed = any(f in serializer.validated_data for f in PHYSICAL_FIELDS)
        with transaction.atomic():
            extra = {'customer': self.request.user} if services.is_customer(self.request.user) else {}
            quote = serializer.save(**extra)
            # Charges follow the new weight and volume; a locked quote rejects the edit
            if physical_changed and QuotePricing.objects.filter(quote=quote).exists():
                recalculate_pricing(quote.pk, user=self.request.user)

    @action(detail=True, methods=['post'], permission_classes=[IsInternalStaff])
    def send(self, request, pk=None):
        quote = services.send_quote(pk, request.user)
        return Response(self.get_serializer(quote).data)

    @action(detail=True, methods=['post'], url_path='confirm-booking')
    def confirm_booking(self, request, pk=None):
        quote = services.confirm_booking(pk, request.user)
        return Response(self.get_serializer(quote).data)

    @action(detail=True, methods=['post'], url_path='breakdown/request', permission_classes=[IsCustomer])
    def request_breakdown(self, request, pk=None):
        quote = services.request_breakdown(pk, request.user)
        return Response(self.get_serializer(quote).data)

    @action(detail=True, methods=['post'], url_path='breakdown/decision', permission_classes=[IsInternalStaff])
    def decide_breakdown(self, request, pk=None):
        ser = BreakdownDecisionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        quote = services.decide_breakdown(
            pk,
            request.user,
            approved=ser.validated_data.get('approved'),
            show=ser.validated_data.get('show'),
            hidden_codes=ser.validated_data.get('hidden_codes'),
        )
        return Response(self.get_serializer(quote).data, status=status.HTTP_200_OK)
