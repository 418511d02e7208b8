import time
from typing import Any

from authlib.jose import JoseError, jwt
from loguru import logger

from src.customer_api.runtime.config.config_data import JWTConfig
from src.customer_api.runtime.context import get_config

RESERVED_CLAIMS = frozenset({"iss", "sub", "exp", "iat"})


class JwtGeneratorService:
    """Issues signed, time-limited bearer tokens.

    The signing secret, issuer and lifetime come from ``JWTConfig``; pass one
    explicitly or the active configuration is used.
    """

    def __init__(self, jwt_config: JWTConfig | None = None) -> None:
        self._config = jwt_config or get_config().jwt

        if not self._config.signing_secret:
            raise ValueError("JWT signing secret not configured")

        if self._config.algorithm not in self._config.allowed_algorithms:
            raise ValueError(
                f"Algorithm {self._config.algorithm} not allowed, "
                f"only {self._config.allowed_algorithms} are allowed"
            )

    @property
    def default_scopes(self) -> list[str]:
        """Scopes granted to tokens issued at registration."""
        return list(self._config.default_scopes)

    def issue(
        self,
        subject: str,
        *scopes: str,
        claims: dict[str, Any] | None = None,
    ) -> str:
        """Generate a signed JWT for ``subject``.

        Args:
            subject: Subject (sub) claim - the customer email
            *scopes: Optional scope names, stored as the ``scopes`` list claim
            claims: Additional claims; registered claim names are ignored

        Returns:
            Signed JWT token string

        Raises:
            ValueError: If the token cannot be encoded
        """
        now = int(time.time())

        payload: dict[str, Any] = {}
        if claims:
            payload.update(
                {k: v for k, v in claims.items() if k not in RESERVED_CLAIMS}
            )
        if scopes:
            payload["scopes"] = list(scopes)

        payload.update(
            {
                "iss": self._config.issuer,
                "sub": subject,
                "iat": now,
                "exp": now + self._config.token_lifetime_seconds,
            }
        )

        header = {"alg": self._config.algorithm, "typ": "JWT"}
        try:
            token = jwt.encode(header, payload, self._config.signing_secret)
        except JoseError as e:
            raise ValueError(f"JWT encoding failed: {e}") from e

        logger.debug("Issued token for subject with scopes {}", payload.get("scopes", []))
        # authlib returns bytes
        return token.decode() if isinstance(token, bytes) else token
