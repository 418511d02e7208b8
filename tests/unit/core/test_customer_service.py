"""CustomerService tests with a mocked storage backend."""

from unittest.mock import Mock

import pytest

from src.customer_api.core.errors import (
    DuplicateResourceError,
    RequestValidationError,
    ResourceNotFoundError,
)
from src.customer_api.core.models import (
    CustomerRegistrationRequest,
    CustomerUpdateRequest,
    CustomerView,
)
from src.customer_api.core.security import PasswordHasher
from src.customer_api.core.services import CustomerService
from tests.utils import make_customer


class TestCustomerLookups:
    def test_list_customers_maps_to_views(self, customer_service: CustomerService, mock_storage: Mock):
        mock_storage.select_all.return_value = [
            make_customer(customer_id=1, email="a@example.com"),
            make_customer(customer_id=2, email="b@example.com"),
        ]

        views = customer_service.list_customers()

        assert [v.id for v in views] == [1, 2]
        assert views[0] == CustomerView(
            id=1,
            name="Alex",
            email="a@example.com",
            age=30,
            roles=["ROLE_USER"],
            username="a@example.com",
        )

    def test_list_customers_empty(self, customer_service: CustomerService, mock_storage: Mock):
        mock_storage.select_all.return_value = []

        assert customer_service.list_customers() == []

    def test_get_customer(self, customer_service: CustomerService, mock_storage: Mock):
        mock_storage.select_by_id.return_value = make_customer(customer_id=7)

        view = customer_service.get_customer(7)

        assert view.id == 7
        mock_storage.select_by_id.assert_called_once_with(7)

    def test_get_customer_not_found(self, customer_service: CustomerService, mock_storage: Mock):
        mock_storage.select_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError) as exc_info:
            customer_service.get_customer(99)

        assert exc_info.value.message == "customer with id [99] not found"


class TestRegisterCustomer:
    def _request(self) -> CustomerRegistrationRequest:
        return CustomerRegistrationRequest(
            name="Alex", email="alex@example.com", password="raw-password", age=30
        )

    def test_register_hashes_password(
        self,
        customer_service: CustomerService,
        mock_storage: Mock,
        password_hasher: PasswordHasher,
    ):
        """The stored customer carries a hash, never the raw password, and no id."""
        mock_storage.exists_with_email.return_value = False
        mock_storage.insert.side_effect = lambda c: c.model_copy(update={"id": 1})

        stored = customer_service.register_customer(self._request())

        inserted = mock_storage.insert.call_args.args[0]
        assert inserted.id is None
        assert inserted.name == "Alex"
        assert inserted.email == "alex@example.com"
        assert inserted.age == 30
        assert inserted.password != "raw-password"
        assert password_hasher.verify("raw-password", inserted.password)
        assert stored.id == 1

    def test_register_duplicate_email(self, customer_service: CustomerService, mock_storage: Mock):
        mock_storage.exists_with_email.return_value = True

        with pytest.raises(DuplicateResourceError) as exc_info:
            customer_service.register_customer(self._request())

        assert exc_info.value.message == "email already taken"
        mock_storage.insert.assert_not_called()


class TestDeleteCustomer:
    def test_delete_existing(self, customer_service: CustomerService, mock_storage: Mock):
        mock_storage.exists_with_id.return_value = True

        customer_service.delete_customer(3)

        mock_storage.delete_by_id.assert_called_once_with(3)

    def test_delete_missing(self, customer_service: CustomerService, mock_storage: Mock):
        mock_storage.exists_with_id.return_value = False

        with pytest.raises(ResourceNotFoundError, match=r"customer with id \[3\] not found"):
            customer_service.delete_customer(3)

        mock_storage.delete_by_id.assert_not_called()


class TestUpdateCustomer:
    """Partial update diffing."""

    @pytest.fixture
    def existing(self, mock_storage: Mock):
        customer = make_customer(customer_id=5, password="stored-hash")
        mock_storage.select_by_id.return_value = customer
        mock_storage.exists_with_email.return_value = False
        return customer

    def test_update_missing_customer(self, customer_service: CustomerService, mock_storage: Mock):
        mock_storage.select_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError):
            customer_service.update_customer(5, CustomerUpdateRequest(name="New"))

        mock_storage.update.assert_not_called()

    def test_update_name_only(self, customer_service: CustomerService, mock_storage: Mock, existing):
        customer_service.update_customer(5, CustomerUpdateRequest(name="Sam"))

        mock_storage.update.assert_called_once_with(existing.model_copy(update={"name": "Sam"}))
        mock_storage.exists_with_email.assert_not_called()

    def test_update_all_fields(self, customer_service: CustomerService, mock_storage: Mock, existing):
        customer_service.update_customer(
            5, CustomerUpdateRequest(name="Sam", email="sam@example.com", age=41)
        )

        updated = mock_storage.update.call_args.args[0]
        assert updated.id == 5
        assert (updated.name, updated.email, updated.age) == ("Sam", "sam@example.com", 41)
        assert updated.password == "stored-hash"
        mock_storage.exists_with_email.assert_called_once_with("sam@example.com")

    def test_update_taken_email(self, customer_service: CustomerService, mock_storage: Mock, existing):
        mock_storage.exists_with_email.return_value = True

        with pytest.raises(DuplicateResourceError, match="email already taken"):
            customer_service.update_customer(5, CustomerUpdateRequest(email="taken@example.com"))

        mock_storage.update.assert_not_called()

    def test_same_email_is_not_a_change(self, customer_service: CustomerService, mock_storage: Mock, existing):
        """Sending the current email skips the uniqueness check and counts as no change."""
        with pytest.raises(RequestValidationError, match="no data changes found"):
            customer_service.update_customer(5, CustomerUpdateRequest(email=existing.email))

        mock_storage.exists_with_email.assert_not_called()
        mock_storage.update.assert_not_called()

    @pytest.mark.parametrize(
        "request_body",
        [
            CustomerUpdateRequest(),
            CustomerUpdateRequest(name="Alex", age=30),
        ],
    )
    def test_no_changes(self, customer_service: CustomerService, mock_storage: Mock, existing, request_body):
        with pytest.raises(RequestValidationError):
            customer_service.update_customer(5, request_body)

        mock_storage.update.assert_not_called()
