import base64
import json

from src.customer_api.entities.customer import Customer


def make_customer(
    name: str = "Alex",
    email: str = "alex@example.com",
    password: str = "hashed-password",
    age: int = 30,
    customer_id: int | None = None,
) -> Customer:
    return Customer(id=customer_id, name=name, email=email, password=password, age=age)


def b64url(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def tamper_payload(token: str, **changes) -> str:
    """Rewrite the payload segment of a compact JWT, keeping the old signature."""
    header, payload, signature = token.split(".")
    padded = payload + "=" * (-len(payload) % 4)
    claims = json.loads(base64.urlsafe_b64decode(padded))
    claims.update(changes)
    return ".".join([header, b64url(claims), signature])
