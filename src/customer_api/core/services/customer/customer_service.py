"""Customer management: lookups, registration, deletion and partial updates."""

from loguru import logger

from src.customer_api.core.errors import DuplicateResourceError, RequestValidationError
from src.customer_api.core.models import (
    CustomerRegistrationRequest,
    CustomerUpdateRequest,
    CustomerView,
)
from src.customer_api.core.security import PasswordHasher
from src.customer_api.core.storage import EMAIL_TAKEN, CustomerStorage, customer_not_found
from src.customer_api.entities.customer import Customer


class CustomerService:
    """Business rules for customers on top of a ``CustomerStorage`` backend."""

    def __init__(self, storage: CustomerStorage, password_hasher: PasswordHasher):
        self._storage = storage
        self._password_hasher = password_hasher

    def list_customers(self) -> list[CustomerView]:
        return [CustomerView.from_entity(c) for c in self._storage.select_all()]

    def get_customer(self, customer_id: int) -> CustomerView:
        customer = self._storage.select_by_id(customer_id)
        if customer is None:
            raise customer_not_found(customer_id)
        return CustomerView.from_entity(customer)

    def register_customer(self, request: CustomerRegistrationRequest) -> Customer:
        """Store a new customer with a hashed password.

        Raises:
            DuplicateResourceError: If the email is already registered
        """
        if self._storage.exists_with_email(request.email):
            logger.debug("Registration rejected, email already registered")
            raise DuplicateResourceError(EMAIL_TAKEN)

        customer = Customer(
            name=request.name,
            email=request.email,
            password=self._password_hasher.hash(request.password),
            age=request.age,
        )
        stored = self._storage.insert(customer)
        logger.info("Registered customer {}", stored.id)
        return stored

    def delete_customer(self, customer_id: int) -> None:
        if not self._storage.exists_with_id(customer_id):
            raise customer_not_found(customer_id)

        self._storage.delete_by_id(customer_id)
        logger.info("Deleted customer {}", customer_id)

    def update_customer(self, customer_id: int, request: CustomerUpdateRequest) -> None:
        """Apply the fields of ``request`` that differ from the stored customer.

        Raises:
            ResourceNotFoundError: If no customer has ``customer_id``
            DuplicateResourceError: If the new email belongs to another customer
            RequestValidationError: If nothing would change
        """
        customer = self._storage.select_by_id(customer_id)
        if customer is None:
            raise customer_not_found(customer_id)

        changes: dict[str, object] = {}

        if request.name is not None and request.name != customer.name:
            changes["name"] = request.name

        if request.email is not None and request.email != customer.email:
            if self._storage.exists_with_email(request.email):
                raise DuplicateResourceError(EMAIL_TAKEN)
            changes["email"] = request.email

        if request.age is not None and request.age != customer.age:
            changes["age"] = request.age

        if not changes:
            raise RequestValidationError("no data changes found")

        self._storage.update(customer.model_copy(update=changes))
        logger.info("Updated customer {} fields {}", customer_id, sorted(changes))
