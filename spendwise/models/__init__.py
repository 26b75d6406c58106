"""SQLAlchemy models."""

from spendwise.models.base import Base
from spendwise.models.category import Category
from spendwise.models.transaction import Transaction

__all__ = [
    "Base",
    "Category",
    "Transaction",
]
