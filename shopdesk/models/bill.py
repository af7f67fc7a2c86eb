"""
ShopDesk Backend: Bill SQLAlchemy Model
=======================================

What:  ORM model for the `bills` table. Rows are written by other systems;
       this API only lists them.
"""

from typing import Optional

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from shopdesk.database import Base


class Bill(Base):
    __tablename__ = "bills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Free-form timestamp text, stored as written by the producer
    date: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    total_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"<Bill(id={self.id}, date='{self.date}', total_amount={self.total_amount})>"
