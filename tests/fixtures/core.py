from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy import Engine, StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.customer_api.core.security import PasswordHasher
from src.customer_api.runtime.config.config_data import JWTConfig

_HS_KEY = "test-signing-secret"
_ISSUER = "customer-api-test"


@pytest.fixture
def signing_secret() -> str:
    return _HS_KEY


@pytest.fixture
def issuer() -> str:
    return _ISSUER


@pytest.fixture
def jwt_config(signing_secret: str, issuer: str) -> JWTConfig:
    return JWTConfig(signing_secret=signing_secret, issuer=issuer)


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture
def engine() -> Generator[Engine]:
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.customer_api.entities.customer import CustomerTable  # noqa: F401

    # Each test gets a fresh database
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    """Create a fresh database session for testing."""
    with Session(engine, expire_on_commit=False) as session:
        try:
            yield session
        finally:
            session.rollback()
