"""Password hashing for stored customer credentials."""

from passlib.context import CryptContext


class PasswordHasher:
    """One-way password hashing backed by a passlib ``CryptContext``.

    pbkdf2_sha256 is implemented inside passlib itself, so no native
    backend is needed at runtime.
    """

    def __init__(self, schemes: list[str] | None = None) -> None:
        self._context = CryptContext(
            schemes=schemes or ["pbkdf2_sha256"], deprecated="auto"
        )

    def hash(self, raw_password: str) -> str:
        return self._context.hash(raw_password)

    def verify(self, raw_password: str, hashed_password: str) -> bool:
        try:
            return self._context.verify(raw_password, hashed_password)
        except ValueError:
            # Not a hash this context recognises.
            return False
