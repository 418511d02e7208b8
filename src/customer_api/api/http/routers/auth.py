"""Login endpoint issuing bearer tokens for registered customers."""

from fastapi import APIRouter, Depends, Response

from src.customer_api.api.http.deps import get_auth_service
from src.customer_api.core.models import AuthenticationRequest, AuthenticationResponse
from src.customer_api.core.services import AuthenticationService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=AuthenticationResponse)
def login(
    credentials: AuthenticationRequest,
    response: Response,
    service: AuthenticationService = Depends(get_auth_service),
) -> AuthenticationResponse:
    """Exchange email and password for a fresh token.

    The token is returned in the body and in the Authorization header.
    """
    result = service.login(credentials)
    response.headers["Authorization"] = result.token
    return result
