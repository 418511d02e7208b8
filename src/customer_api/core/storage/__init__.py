"""Customer storage backends."""

from .customer_storage import (
    EMAIL_TAKEN,
    CustomerStorage,
    InMemoryCustomerStorage,
    OrmCustomerStorage,
    SqlCustomerStorage,
    StorageBackend,
    build_customer_storage,
    customer_not_found,
)

__all__ = [
    "EMAIL_TAKEN",
    "CustomerStorage",
    "InMemoryCustomerStorage",
    "OrmCustomerStorage",
    "SqlCustomerStorage",
    "StorageBackend",
    "build_customer_storage",
    "customer_not_found",
]
