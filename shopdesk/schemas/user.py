"""
ShopDesk Backend: User Request/Response Schemas
===============================================
"""

from typing import Optional

from pydantic import BaseModel, Field

from shopdesk.schemas.common import FormPayload


class RegisterPayload(FormPayload):
    """
    Fields accepted by POST /register.

    Declared optional so that a missing field reaches UserService, which
    answers with the registration-specific 400 message instead of a 422.
    """
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    password: Optional[str] = None

    def is_complete(self) -> bool:
        return all(
            (self.name, self.username, self.email, self.address, self.password)
        )


class LoginPayload(FormPayload):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool = Field(description="True when the credentials matched")
    message: str
