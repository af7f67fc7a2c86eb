"""
ShopDesk Backend: Product SQLAlchemy Model
==========================================

What:  ORM model for the `inventory` table.
Who:   Used by ProductService for CRUD and by Store.create_schema().

Table Design:
    - INTEGER PRIMARY KEY AUTOINCREMENT: ids are never reused, even after a
      delete, so an id keeps identifying the same product for its lifetime
    - image: raw uploaded bytes stored in the row (no separate blob store)
    - All other columns are nullable; update-product writes whatever it
      receives, including nulls
"""

from typing import Optional

from sqlalchemy import Float, Integer, LargeBinary, Text
from sqlalchemy.orm import Mapped, mapped_column

from shopdesk.database import Base


class Product(Base):
    """
    A catalog entry.

    Lifecycle:
        1. Created by POST /addProduct
        2. Replaced in place by PUT /updateProduct/{id} (image kept unless a new one arrives)
        3. Removed by DELETE /deleteProduct/{id}
    """

    __tablename__ = "inventory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    stock: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    unit: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Exact, case-sensitive match target for GET /products?category=
    category: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)

    __table_args__ = {"sqlite_autoincrement": True}

    @property
    def image_url(self) -> Optional[str]:
        return f"/image/{self.id}" if self.image is not None else None

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', category='{self.category}')>"
