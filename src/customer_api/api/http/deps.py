"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from loguru import logger
from sqlmodel import Session

from src.customer_api.api.http.app_data import ApplicationDependencies
from src.customer_api.core.errors import AuthenticationFailedError
from src.customer_api.core.security import PasswordHasher
from src.customer_api.core.services import (
    AuthenticationService,
    CustomerService,
    JwtGeneratorService,
    JwtVerificationService,
)
from src.customer_api.core.storage import CustomerStorage, build_customer_storage
from src.customer_api.entities.customer import Customer


def _app_deps(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Open a session for the duration of one request."""
    session = _app_deps(request).database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    return _app_deps(request).jwt_verify_service


def get_jwt_generation_service(request: Request) -> JwtGeneratorService:
    """Get the JWT generation service instance."""
    return _app_deps(request).jwt_generation_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return _app_deps(request).password_hasher


def get_customer_storage(
    request: Request, db: Session = Depends(get_db_session)
) -> CustomerStorage:
    """Storage adapter for the configured backend, bound to this request's session."""
    app_deps = _app_deps(request)
    return build_customer_storage(
        app_deps.storage_backend, session=db, memory_storage=app_deps.memory_storage
    )


def get_customer_service(
    storage: CustomerStorage = Depends(get_customer_storage),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> CustomerService:
    return CustomerService(storage, password_hasher)


def get_auth_service(
    storage: CustomerStorage = Depends(get_customer_storage),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    jwt_generator: JwtGeneratorService = Depends(get_jwt_generation_service),
) -> AuthenticationService:
    return AuthenticationService(storage, password_hasher, jwt_generator)


def get_current_customer(
    request: Request,
    storage: CustomerStorage = Depends(get_customer_storage),
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> Customer:
    """Authenticate the request using a Bearer token.

    The token subject must still belong to a stored customer.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise AuthenticationFailedError("Missing Bearer token")

    token = auth_header.split(" ", 1)[1].strip()
    claims = jwt_verify.verify(token)

    customer = storage.select_by_email(claims.subject)
    if customer is None:
        logger.warning("Token subject no longer exists")
        raise AuthenticationFailedError("Unknown token subject")

    return customer
