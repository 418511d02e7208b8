"""Email and password login."""

from loguru import logger

from src.customer_api.core.errors import BadCredentialsError
from src.customer_api.core.models import (
    AuthenticationRequest,
    AuthenticationResponse,
    CustomerView,
)
from src.customer_api.core.security import PasswordHasher
from src.customer_api.core.services.jwt import JwtGeneratorService
from src.customer_api.core.storage import CustomerStorage

BAD_CREDENTIALS = "Bad credentials"


class AuthenticationService:
    """Checks customer credentials and issues a fresh token on success."""

    def __init__(
        self,
        storage: CustomerStorage,
        password_hasher: PasswordHasher,
        jwt_generator: JwtGeneratorService,
    ):
        self._storage = storage
        self._password_hasher = password_hasher
        self._jwt_generator = jwt_generator

    def login(self, request: AuthenticationRequest) -> AuthenticationResponse:
        customer = self._storage.select_by_email(request.username)

        # Unknown email and wrong password are indistinguishable to the caller
        if customer is None or not self._password_hasher.verify(
            request.password, customer.password
        ):
            logger.warning("Login failed")
            raise BadCredentialsError(BAD_CREDENTIALS)

        token = self._jwt_generator.issue(customer.username, *customer.roles)
        logger.info("Customer {} logged in", customer.id)
        return AuthenticationResponse(
            token=token, customer=CustomerView.from_entity(customer)
        )
