"""JWT verification service."""

import time

from authlib.jose import JoseError, jwt
from loguru import logger

from src.customer_api.core.errors import AuthenticationFailedError
from src.customer_api.core.models.token import TokenClaims
from src.customer_api.core.services.jwt.jwt_utils import (
    create_token_claims,
    preview_jwt,
)
from src.customer_api.runtime.config.config_data import JWTConfig
from src.customer_api.runtime.context import get_config


class JwtVerificationService:
    """Validates tokens issued by ``JwtGeneratorService``.

    A token is accepted only when its signature verifies against the shared
    secret and the current time is before its expiry. Every failure raises
    ``AuthenticationFailedError``.
    """

    def __init__(self, jwt_config: JWTConfig | None = None) -> None:
        self._config = jwt_config or get_config().jwt
        if not self._config.signing_secret:
            raise ValueError("JWT signing secret not configured")

    def verify(self, token: str) -> TokenClaims:
        pv = preview_jwt(token)

        # alg allowlist
        if pv.alg not in self._config.allowed_algorithms:
            raise AuthenticationFailedError("Disallowed JWT algorithm")

        now = int(time.time())
        claims_options = {
            "sub": {"essential": True},
            "exp": {"essential": True},
        }

        try:
            claims = jwt.decode(
                token, self._config.signing_secret, claims_options=claims_options
            )
            claims.validate(now=now, leeway=self._config.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("Token rejected: {}", exc)
            raise AuthenticationFailedError(f"JWT error: {exc}") from exc

        # exp must be strictly in the future (minus skew)
        if now >= int(claims["exp"]) + self._config.clock_skew:
            raise AuthenticationFailedError("Token expired")

        if not claims.get("sub"):
            raise AuthenticationFailedError("Missing sub claim")

        return create_token_claims(token=token, claims=dict(claims))

    def get_subject(self, token: str) -> str:
        """Return the subject of a valid token."""
        return self.verify(token).subject

    def is_token_valid(self, token: str, username: str) -> bool:
        """True when ``token`` verifies and was issued to ``username``."""
        try:
            return self.verify(token).subject == username
        except AuthenticationFailedError:
            return False
