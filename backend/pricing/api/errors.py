from rest_framework import status
from rest_framework.response import Response

from pricing.services.errors import PricingError

STATUS_BY_CODE = {
    'NOT_FOUND': status.HTTP_404_NOT_FOUND,
    'VALIDATION_ERROR': status.HTTP_400_BAD_REQUEST,
    'PRICING_LOCKED': status.HTTP_409_CONFLICT,
    'ALREADY_EXISTS': status.HTTP_409_CONFLICT,
    'FORBIDDEN': status.HTTP_403_FORBIDDEN,
    'CONFIGURATION_ERROR': status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def domain_error_response(exc: PricingError) -> Response:
    """Consistent error payload shape across API: {'detail': ..., 'code': ...}."""
    return Response(exc.as_payload(), status=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST))


class DomainErrorMixin:
    """Maps pricing domain errors raised inside a DRF view to their HTTP response."""

    def handle_exception(self, exc):
        if isinstance(exc, PricingError):
            return domain_error_response(exc)
        return super().handle_exception(exc)
