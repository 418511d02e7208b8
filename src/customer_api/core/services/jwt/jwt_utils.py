import base64
import json
from dataclasses import dataclass
from typing import Any, Final

from src.customer_api.core.errors import AuthenticationFailedError
from src.customer_api.core.models.token import TokenClaims

# ---------------- tunables ----------------
MAX_JWT_CHARS: Final = 4096
MAX_HEADER_BYTES: Final = 8 * 1024
MAX_PAYLOAD_BYTES: Final = 64 * 1024
_ALLOWED: Final = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_."
)  # no '='

REGISTERED_CLAIMS: Final = frozenset({"iss", "sub", "aud", "exp", "iat", "nbf", "jti", "scopes"})


def _prefilter_compact_jwt(token: str) -> tuple[str, str, str]:
    if not token or len(token) > MAX_JWT_CHARS:
        raise AuthenticationFailedError("Invalid JWT size")
    if any(ch not in _ALLOWED for ch in token):
        raise AuthenticationFailedError("Invalid JWT characters")

    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise AuthenticationFailedError("Invalid JWT format")
    return parts[0], parts[1], parts[2]


def _b64url_decode_unpadded(seg: str, what: str, max_bytes: int) -> bytes:
    pad = (-len(seg)) % 4
    try:
        raw = base64.urlsafe_b64decode((seg + "=" * pad).encode("ascii"))
    except ValueError as e:
        raise AuthenticationFailedError(f"Invalid base64url in {what}") from e
    if len(raw) > max_bytes:
        raise AuthenticationFailedError(f"{what} too large")
    return raw


def _decode_json_object(raw: bytes, what: str) -> dict[str, Any]:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise AuthenticationFailedError(f"Non-UTF8 {what}") from e
    except json.JSONDecodeError as e:
        raise AuthenticationFailedError(f"Invalid JSON in {what}") from e
    if not isinstance(obj, dict):
        raise AuthenticationFailedError(f"{what} must be a JSON object")
    return obj


@dataclass(frozen=True)
class JwtPreview:
    header: dict[str, Any]
    claims: dict[str, Any]
    alg: str | None


def preview_jwt(token: str) -> JwtPreview:
    """Split and decode header+payload without checking the signature."""
    h_seg, p_seg, _ = _prefilter_compact_jwt(token)
    header = _decode_json_object(
        _b64url_decode_unpadded(h_seg, "JWT header", MAX_HEADER_BYTES), "JWT header"
    )
    claims = _decode_json_object(
        _b64url_decode_unpadded(p_seg, "JWT payload", MAX_PAYLOAD_BYTES), "JWT payload"
    )
    return JwtPreview(header=header, claims=claims, alg=header.get("alg"))


def _as_list(v) -> list[str]:
    if v is None:
        return []
    return [v] if isinstance(v, str) else [str(s) for s in v]


def create_token_claims(token: str, claims: dict[str, Any]) -> TokenClaims:
    """Build ``TokenClaims`` from a verified claim set."""
    return TokenClaims(
        token=token,
        subject=claims["sub"],
        issuer=claims.get("iss"),
        issued_at=claims.get("iat"),
        expires_at=claims["exp"],
        scopes=_as_list(claims.get("scopes")),
        custom_claims={k: v for k, v in claims.items() if k not in REGISTERED_CLAIMS},
    )
