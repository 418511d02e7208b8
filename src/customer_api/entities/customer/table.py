"""Customer database table model."""

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from src.customer_api.entities.core._base import EntityTable


class CustomerTable(EntityTable, table=True):
    """Database persistence model for customers.

    This represents how the Customer entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "customer"
    __table_args__ = (
        UniqueConstraint("email", name="customer_email_unique"),
    )

    name: str = Field(nullable=False)
    email: str = Field(nullable=False)
    password: str = Field(nullable=False)
    age: int = Field(nullable=False)
