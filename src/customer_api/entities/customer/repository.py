"""Customer repository: SQLModel data access for customer rows."""

from sqlmodel import Session, func, select

from src.customer_api.entities.customer.entity import Customer
from src.customer_api.entities.customer.table import CustomerTable


class CustomerRepository:
    """Data-access layer for customers.

    The repository only stages changes on the session; committing is left to
    the caller so several calls can share one transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[Customer]:
        rows = self._session.exec(select(CustomerTable).order_by(CustomerTable.id)).all()
        return [Customer.model_validate(row, from_attributes=True) for row in rows]

    def get(self, customer_id: int) -> Customer | None:
        row = self._session.get(CustomerTable, customer_id)
        if row is None:
            return None
        return Customer.model_validate(row, from_attributes=True)

    def get_by_email(self, email: str) -> Customer | None:
        statement = select(CustomerTable).where(CustomerTable.email == email)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Customer.model_validate(row, from_attributes=True)

    def exists(self, customer_id: int) -> bool:
        statement = select(func.count(CustomerTable.id)).where(CustomerTable.id == customer_id)
        return self._session.exec(statement).one() > 0

    def exists_by_email(self, email: str) -> bool:
        statement = select(func.count(CustomerTable.id)).where(CustomerTable.email == email)
        return self._session.exec(statement).one() > 0

    def create(self, customer: Customer) -> Customer:
        row = CustomerTable.model_validate(customer.model_dump(exclude={"id"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Customer.model_validate(row, from_attributes=True)

    def update(self, customer: Customer) -> Customer:
        row = self._session.get(CustomerTable, customer.id)
        if row is None:
            raise ValueError(f"Customer {customer.id} not found")

        row.sqlmodel_update(customer.model_dump(exclude={"id"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Customer.model_validate(row, from_attributes=True)

    def delete(self, customer_id: int) -> bool:
        row = self._session.get(CustomerTable, customer_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
