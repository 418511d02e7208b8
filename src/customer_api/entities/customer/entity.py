"""Customer domain entity."""

from typing import Any

from pydantic import Field

from src.customer_api.entities.core._base import Entity

DEFAULT_ROLES: tuple[str, ...] = ("ROLE_USER",)


class Customer(Entity):
    """Customer entity representing a registered account.

    ``password`` always holds a one-way hash, never the raw credential.
    """

    name: str = Field(description="Display name")
    email: str = Field(description="Email address, unique across customers")
    password: str = Field(description="Hashed password credential", repr=False)
    age: int = Field(description="Customer age")

    @property
    def roles(self) -> list[str]:
        """Granted roles; every customer currently holds ``ROLE_USER``."""
        return list(DEFAULT_ROLES)

    @property
    def username(self) -> str:
        """The login name exposed to the authentication layer."""
        return self.email

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Customer):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
            and self.password == other.password
            and self.age == other.age
        )

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.email, self.password, self.age))
