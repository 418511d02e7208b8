"""Customer storage interface and implementations.

Provides one interface for reading and writing customers with three
interchangeable backends: an in-memory list, hand-written SQL and the
SQLModel repository. The backend is chosen once at startup.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Literal

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.customer_api.core.errors import DuplicateResourceError, ResourceNotFoundError
from src.customer_api.entities.customer import Customer, CustomerRepository

StorageBackend = Literal["memory", "sql", "orm"]

EMAIL_TAKEN = "email already taken"


def customer_not_found(customer_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError(f"customer with id [{customer_id}] not found")


class CustomerStorage(ABC):
    """Abstract interface for customer storage backends.

    Absence is always reported as ``None`` or ``False``; no ``select_*``
    method raises because a row is missing.
    """

    @abstractmethod
    def select_all(self) -> list[Customer]:
        """Return every stored customer in the store's natural order."""

    @abstractmethod
    def select_by_id(self, customer_id: int) -> Customer | None:
        """Return the customer with ``customer_id`` or None."""

    @abstractmethod
    def select_by_email(self, email: str) -> Customer | None:
        """Return the customer registered with ``email`` or None."""

    @abstractmethod
    def exists_with_email(self, email: str) -> bool:
        pass

    @abstractmethod
    def exists_with_id(self, customer_id: int) -> bool:
        pass

    @abstractmethod
    def insert(self, customer: Customer) -> Customer:
        """Store a new customer and return it with its assigned id.

        Raises:
            DuplicateResourceError: If the email is already stored
        """

    @abstractmethod
    def update(self, customer: Customer) -> None:
        """Replace every column of the stored row in a single write.

        Raises:
            DuplicateResourceError: If the new email belongs to another row
            ResourceNotFoundError: If no row has the customer's id
        """

    @abstractmethod
    def delete_by_id(self, customer_id: int) -> None:
        pass


class InMemoryCustomerStorage(CustomerStorage):
    """List-backed storage; state lives on the instance, not the module."""

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._lock = threading.Lock()
        self._customers: list[Customer] = []
        self._next_id = 1
        for customer in customers or []:
            self.insert(customer)

    def select_all(self) -> list[Customer]:
        with self._lock:
            return [c.model_copy() for c in self._customers]

    def select_by_id(self, customer_id: int) -> Customer | None:
        with self._lock:
            found = self._find(customer_id)
            return found.model_copy() if found else None

    def select_by_email(self, email: str) -> Customer | None:
        with self._lock:
            found = next((c for c in self._customers if c.email == email), None)
            return found.model_copy() if found else None

    def exists_with_email(self, email: str) -> bool:
        with self._lock:
            return any(c.email == email for c in self._customers)

    def exists_with_id(self, customer_id: int) -> bool:
        with self._lock:
            return self._find(customer_id) is not None

    def insert(self, customer: Customer) -> Customer:
        with self._lock:
            if any(c.email == customer.email for c in self._customers):
                raise DuplicateResourceError(EMAIL_TAKEN)
            stored = customer.model_copy(update={"id": self._next_id})
            self._next_id += 1
            self._customers.append(stored)
            return stored.model_copy()

    def update(self, customer: Customer) -> None:
        with self._lock:
            if any(
                c.email == customer.email and c.id != customer.id
                for c in self._customers
            ):
                raise DuplicateResourceError(EMAIL_TAKEN)
            for index, existing in enumerate(self._customers):
                if existing.id == customer.id:
                    self._customers[index] = customer.model_copy()
                    return
            raise customer_not_found(customer.id)

    def delete_by_id(self, customer_id: int) -> None:
        with self._lock:
            self._customers = [c for c in self._customers if c.id != customer_id]

    def _find(self, customer_id: int) -> Customer | None:
        return next((c for c in self._customers if c.id == customer_id), None)


class SqlCustomerStorage(CustomerStorage):
    """Storage issuing hand-written SQL over the session's connection."""

    _COLUMNS = "id, name, email, password, age"

    def __init__(self, session: Session) -> None:
        self._session = session

    def _execute(self, sql: str, params: dict | None = None):
        return self._session.connection().execute(text(sql), params or {})

    @staticmethod
    def _to_customer(row) -> Customer:
        return Customer(
            id=row.id,
            name=row.name,
            email=row.email,
            password=row.password,
            age=row.age,
        )

    def select_all(self) -> list[Customer]:
        rows = self._execute(f"SELECT {self._COLUMNS} FROM customer ORDER BY id")
        return [self._to_customer(row) for row in rows]

    def select_by_id(self, customer_id: int) -> Customer | None:
        row = self._execute(
            f"SELECT {self._COLUMNS} FROM customer WHERE id = :id",
            {"id": customer_id},
        ).first()
        return self._to_customer(row) if row else None

    def select_by_email(self, email: str) -> Customer | None:
        row = self._execute(
            f"SELECT {self._COLUMNS} FROM customer WHERE email = :email",
            {"email": email},
        ).first()
        return self._to_customer(row) if row else None

    def exists_with_email(self, email: str) -> bool:
        count = self._execute(
            "SELECT count(id) FROM customer WHERE email = :email", {"email": email}
        ).scalar_one()
        return count > 0

    def exists_with_id(self, customer_id: int) -> bool:
        count = self._execute(
            "SELECT count(id) FROM customer WHERE id = :id", {"id": customer_id}
        ).scalar_one()
        return count > 0

    def insert(self, customer: Customer) -> Customer:
        try:
            new_id = self._execute(
                "INSERT INTO customer (name, email, password, age) "
                "VALUES (:name, :email, :password, :age) RETURNING id",
                customer.model_dump(exclude={"id"}),
            ).scalar_one()
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateResourceError(EMAIL_TAKEN) from e

        logger.debug("Inserted customer row {}", new_id)
        return customer.model_copy(update={"id": new_id})

    def update(self, customer: Customer) -> None:
        try:
            result = self._execute(
                "UPDATE customer SET name = :name, email = :email, "
                "password = :password, age = :age WHERE id = :id",
                customer.model_dump(),
            )
            if result.rowcount == 0:
                self._session.rollback()
                raise customer_not_found(customer.id)
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateResourceError(EMAIL_TAKEN) from e

        logger.debug("Updated customer row {} ({} affected)", customer.id, result.rowcount)

    def delete_by_id(self, customer_id: int) -> None:
        result = self._execute("DELETE FROM customer WHERE id = :id", {"id": customer_id})
        self._session.commit()
        logger.debug("Deleted customer row {} ({} affected)", customer_id, result.rowcount)


class OrmCustomerStorage(CustomerStorage):
    """Storage backed by the SQLModel ``CustomerRepository``."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._repository = CustomerRepository(session)

    def select_all(self) -> list[Customer]:
        return self._repository.list_all()

    def select_by_id(self, customer_id: int) -> Customer | None:
        return self._repository.get(customer_id)

    def select_by_email(self, email: str) -> Customer | None:
        return self._repository.get_by_email(email)

    def exists_with_email(self, email: str) -> bool:
        return self._repository.exists_by_email(email)

    def exists_with_id(self, customer_id: int) -> bool:
        return self._repository.exists(customer_id)

    def insert(self, customer: Customer) -> Customer:
        try:
            created = self._repository.create(customer)
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateResourceError(EMAIL_TAKEN) from e
        return created

    def update(self, customer: Customer) -> None:
        try:
            self._repository.update(customer)
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateResourceError(EMAIL_TAKEN) from e
        except ValueError as e:
            raise customer_not_found(customer.id) from e

    def delete_by_id(self, customer_id: int) -> None:
        if self._repository.delete(customer_id):
            self._session.commit()


def build_customer_storage(
    backend: StorageBackend,
    session: Session | None = None,
    memory_storage: InMemoryCustomerStorage | None = None,
) -> CustomerStorage:
    """Return the storage adapter for ``backend``.

    Args:
        backend: One of ``memory``, ``sql`` or ``orm``
        session: Database session, required by the ``sql`` and ``orm`` backends
        memory_storage: Shared in-memory store, required by the ``memory`` backend
    """
    if backend == "memory":
        if memory_storage is None:
            raise ValueError("memory backend requires an InMemoryCustomerStorage")
        return memory_storage

    if session is None:
        raise ValueError(f"{backend} backend requires a database session")

    if backend == "sql":
        return SqlCustomerStorage(session)
    if backend == "orm":
        return OrmCustomerStorage(session)

    raise ValueError(f"Unknown customer storage backend: {backend}")
