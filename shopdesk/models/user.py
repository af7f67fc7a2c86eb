"""
ShopDesk Backend: User SQLAlchemy Model
=======================================

What:  ORM model for the `users` table.

The UNIQUE constraints on username and email are the final word on
uniqueness: registration pre-checks with a read, and a concurrent insert
that slips past the read still fails on the constraint.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from shopdesk.database import Base


class User(Base):
    """A registered account. Created by POST /register, never updated or deleted."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    username: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    # Salted one-way hash, never the plaintext password
    password: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
