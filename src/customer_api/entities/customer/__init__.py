"""Customer entity module.

This module contains all Customer-related classes organized by responsibility:
- Customer: Domain entity
- CustomerTable: Database persistence model
- CustomerRepository: Data access layer
"""

from .entity import Customer
from .repository import CustomerRepository
from .table import CustomerTable

__all__ = ["Customer", "CustomerTable", "CustomerRepository"]
