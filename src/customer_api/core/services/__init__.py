"""Core services exports."""

# Authentication
from .auth.auth_service import AuthenticationService

# Customers
from .customer.customer_service import CustomerService

# Database Service
from .database.db_session import DbSessionService

# JWT Services
from .jwt.jwt_gen import JwtGeneratorService
from .jwt.jwt_verify import JwtVerificationService

__all__ = [
    # JWT Services
    "JwtGeneratorService",
    "JwtVerificationService",
    # Domain services
    "AuthenticationService",
    "CustomerService",
    # Database Service
    "DbSessionService",
]
