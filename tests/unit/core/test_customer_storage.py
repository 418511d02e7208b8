"""Contract tests run against every customer storage backend."""

import pytest

from src.customer_api.core.errors import DuplicateResourceError, ResourceNotFoundError
from src.customer_api.core.models import CustomerUpdateRequest
from src.customer_api.core.security import PasswordHasher
from src.customer_api.core.services import CustomerService
from src.customer_api.core.storage import (
    CustomerStorage,
    InMemoryCustomerStorage,
    OrmCustomerStorage,
    SqlCustomerStorage,
    build_customer_storage,
)
from tests.utils import make_customer


class TestCustomerStorageContract:
    """Behaviour every backend must share."""

    def test_insert_assigns_distinct_ids(self, customer_storage: CustomerStorage):
        first = customer_storage.insert(make_customer(email="a@example.com"))
        second = customer_storage.insert(make_customer(email="b@example.com"))

        assert first.id is not None
        assert second.id is not None
        assert first.id != second.id

    def test_select_all_returns_inserted(self, customer_storage: CustomerStorage):
        assert customer_storage.select_all() == []

        created = customer_storage.insert(make_customer())

        assert customer_storage.select_all() == [created]

    def test_select_by_id_and_email(self, customer_storage: CustomerStorage):
        created = customer_storage.insert(make_customer())

        assert customer_storage.select_by_id(created.id) == created
        assert customer_storage.select_by_email(created.email) == created

    def test_absent_rows_report_none(self, customer_storage: CustomerStorage):
        """Lookups of missing rows return None instead of raising."""
        assert customer_storage.select_by_id(12345) is None
        assert customer_storage.select_by_email("ghost@example.com") is None
        assert customer_storage.exists_with_id(12345) is False
        assert customer_storage.exists_with_email("ghost@example.com") is False

    def test_exists_checks(self, customer_storage: CustomerStorage):
        created = customer_storage.insert(make_customer())

        assert customer_storage.exists_with_id(created.id)
        assert customer_storage.exists_with_email(created.email)

    def test_insert_duplicate_email_raises(self, customer_storage: CustomerStorage):
        customer_storage.insert(make_customer())

        with pytest.raises(DuplicateResourceError) as exc_info:
            customer_storage.insert(make_customer(name="Other"))

        assert exc_info.value.message == "email already taken"
        assert len(customer_storage.select_all()) == 1

    def test_update_replaces_every_field(self, customer_storage: CustomerStorage):
        created = customer_storage.insert(make_customer())
        changed = created.model_copy(
            update={"name": "Sam", "email": "sam@example.com", "age": 44}
        )

        customer_storage.update(changed)

        assert customer_storage.select_by_id(created.id) == changed

    def test_update_to_taken_email_raises(self, customer_storage: CustomerStorage):
        customer_storage.insert(make_customer(email="a@example.com"))
        second = customer_storage.insert(make_customer(email="b@example.com"))

        with pytest.raises(DuplicateResourceError):
            customer_storage.update(second.model_copy(update={"email": "a@example.com"}))

        assert customer_storage.select_by_id(second.id).email == "b@example.com"

    def test_update_missing_row_raises(self, customer_storage: CustomerStorage):
        """Every backend reports an update of a vanished row the same way."""
        with pytest.raises(ResourceNotFoundError, match=r"customer with id \[77\] not found"):
            customer_storage.update(make_customer(customer_id=77))

        assert customer_storage.select_all() == []

    def test_update_after_concurrent_delete(
        self, customer_storage: CustomerStorage, password_hasher: PasswordHasher
    ):
        """A row deleted between the read and the write surfaces as not found."""
        created = customer_storage.insert(make_customer())
        read = customer_storage.select_by_id

        def select_then_delete(customer_id: int):
            found = read(customer_id)
            customer_storage.delete_by_id(customer_id)
            return found

        customer_storage.select_by_id = select_then_delete
        service = CustomerService(customer_storage, password_hasher)

        with pytest.raises(ResourceNotFoundError):
            service.update_customer(created.id, CustomerUpdateRequest(name="New"))

    def test_delete_by_id(self, customer_storage: CustomerStorage):
        keep = customer_storage.insert(make_customer(email="keep@example.com"))
        drop = customer_storage.insert(make_customer(email="drop@example.com"))

        customer_storage.delete_by_id(drop.id)

        assert customer_storage.select_all() == [keep]
        assert not customer_storage.exists_with_id(drop.id)


class TestInMemoryCustomerStorage:
    def test_state_is_per_instance(self):
        first = InMemoryCustomerStorage()
        second = InMemoryCustomerStorage()

        first.insert(make_customer())

        assert second.select_all() == []

    def test_returned_customers_are_copies(self):
        """Mutating a returned customer does not change the stored row."""
        storage = InMemoryCustomerStorage()
        created = storage.insert(make_customer())

        created.name = "Mutated"

        assert storage.select_by_id(created.id).name == "Alex"

    def test_seed_customers(self):
        storage = InMemoryCustomerStorage(
            [make_customer(email="a@example.com"), make_customer(email="b@example.com")]
        )

        assert [c.id for c in storage.select_all()] == [1, 2]


class TestBuildCustomerStorage:
    def test_selects_adapter(self, session):
        memory = InMemoryCustomerStorage()

        assert build_customer_storage("memory", memory_storage=memory) is memory
        assert isinstance(build_customer_storage("sql", session=session), SqlCustomerStorage)
        assert isinstance(build_customer_storage("orm", session=session), OrmCustomerStorage)

    def test_missing_requirements(self):
        with pytest.raises(ValueError):
            build_customer_storage("memory")
        with pytest.raises(ValueError):
            build_customer_storage("orm")

    def test_unknown_backend(self, session):
        with pytest.raises(ValueError, match="Unknown"):
            build_customer_storage("files", session=session)  # type: ignore[arg-type]
