"""
Domain errors raised by the pricing services.

The API layer maps each error to an HTTP status via its ``code``; services
never build responses themselves.
"""


class PricingError(Exception):
    """Base exception for pricing engine errors"""
    code = 'PRICING_ERROR'

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message

    def as_payload(self) -> dict:
        return {'detail': self.message, 'code': self.code}


class NotFound(PricingError):
    """Raised when a template, quote, pricing, charge or block is missing"""
    code = 'NOT_FOUND'


class ValidationError(PricingError):
    """Raised when an operation's input or the current state rejects it"""
    code = 'VALIDATION_ERROR'


class AlreadyExists(PricingError):
    """Raised when a bundle that may only be attached once is attached again"""
    code = 'ALREADY_EXISTS'


class PermissionDenied(PricingError):
    """Raised when the caller's role does not allow the operation"""
    code = 'FORBIDDEN'


class PricingLocked(PricingError):
    """Raised when a non-admin mutates pricing on a locked quote"""
    code = 'PRICING_LOCKED'

    def __init__(self, locked_at, message: str = 'Pricing is locked. Only an admin can edit it.'):
        super().__init__(message)
        self.locked_at = locked_at

    def as_payload(self) -> dict:
        payload = super().as_payload()
        payload['lockedAt'] = self.locked_at.isoformat() if self.locked_at else None
        return payload


class ConfigurationError(PricingError):
    """Raised when there are issues with the template catalog configuration"""
    code = 'CONFIGURATION_ERROR'
