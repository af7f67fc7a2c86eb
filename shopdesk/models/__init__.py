"""ORM models. Importing this package registers every table on Base.metadata."""

from shopdesk.models.bill import Bill
from shopdesk.models.product import Product
from shopdesk.models.user import User

__all__ = ["Bill", "Product", "User"]
