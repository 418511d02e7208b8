from dataclasses import dataclass

from src.customer_api.core.security import PasswordHasher
from src.customer_api.core.services import (
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
)
from src.customer_api.core.storage import InMemoryCustomerStorage, StorageBackend


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    jwt_generation_service: JwtGeneratorService
    jwt_verify_service: JwtVerificationService
    password_hasher: PasswordHasher
    storage_backend: StorageBackend
    # Only used by the "memory" backend; shared across requests
    memory_storage: InMemoryCustomerStorage | None = None
