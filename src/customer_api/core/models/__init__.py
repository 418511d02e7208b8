"""API and service models."""

from .customer import (
    AuthenticationRequest,
    AuthenticationResponse,
    CustomerRegistrationRequest,
    CustomerUpdateRequest,
    CustomerView,
)
from .token import TokenClaims

__all__ = [
    "AuthenticationRequest",
    "AuthenticationResponse",
    "CustomerRegistrationRequest",
    "CustomerUpdateRequest",
    "CustomerView",
    "TokenClaims",
]
