"""Request and response models for the customer API."""

from pydantic import BaseModel, ConfigDict, Field

from src.customer_api.entities.customer import Customer

# Largest value the INTEGER age column holds
MAX_AGE = 2**31 - 1


class CustomerView(BaseModel):
    """Read-only projection of a customer returned to API clients."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Customer identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")
    age: int = Field(description="Customer age")
    roles: list[str] = Field(description="Granted roles")
    username: str = Field(description="Login name (the email)")

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerView":
        return cls(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            age=customer.age,
            roles=customer.roles,
            username=customer.username,
        )


class CustomerRegistrationRequest(BaseModel):
    """Input for registering a new customer."""

    name: str
    email: str
    password: str
    age: int = Field(ge=0, le=MAX_AGE)


class CustomerUpdateRequest(BaseModel):
    """Partial update; a ``None`` field means leave it unchanged."""

    name: str | None = None
    email: str | None = None
    age: int | None = Field(default=None, ge=0, le=MAX_AGE)


class AuthenticationRequest(BaseModel):
    """Email/password login."""

    username: str
    password: str


class AuthenticationResponse(BaseModel):
    """Token issued on login together with the authenticated customer."""

    token: str
    customer: CustomerView
