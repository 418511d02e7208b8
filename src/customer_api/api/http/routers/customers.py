"""Customer API router with CRUD operations."""

from fastapi import APIRouter, Depends, Response

from src.customer_api.api.http.deps import (
    get_current_customer,
    get_customer_service,
    get_jwt_generation_service,
)
from src.customer_api.core.models import (
    CustomerRegistrationRequest,
    CustomerUpdateRequest,
    CustomerView,
)
from src.customer_api.core.services import CustomerService, JwtGeneratorService

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])

# Every route except registration requires a valid bearer token
protected = [Depends(get_current_customer)]


@router.get("", response_model=list[CustomerView], dependencies=protected)
def list_customers(
    service: CustomerService = Depends(get_customer_service),
) -> list[CustomerView]:
    """List all customers."""
    return service.list_customers()


@router.get("/{customer_id}", response_model=CustomerView, dependencies=protected)
def get_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerView:
    """Get a customer by ID."""
    return service.get_customer(customer_id)


@router.post("")
def register_customer(
    registration: CustomerRegistrationRequest,
    service: CustomerService = Depends(get_customer_service),
    jwt_generator: JwtGeneratorService = Depends(get_jwt_generation_service),
) -> Response:
    """Register a customer and return a token for it in the Authorization header."""
    customer = service.register_customer(registration)
    token = jwt_generator.issue(customer.username, *jwt_generator.default_scopes)
    return Response(status_code=200, headers={"Authorization": token})


@router.put("/{customer_id}", dependencies=protected)
def update_customer(
    customer_id: int,
    update: CustomerUpdateRequest,
    service: CustomerService = Depends(get_customer_service),
) -> Response:
    """Apply a partial update to a customer."""
    service.update_customer(customer_id, update)
    return Response(status_code=200)


@router.delete("/{customer_id}", dependencies=protected)
def delete_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
) -> Response:
    """Delete a customer."""
    service.delete_customer(customer_id)
    return Response(status_code=200)
