"""
ShopDesk Backend: User Service
==============================

What:  Registration and credential checks.
Who:   Called by shopdesk.routes.users.

Passwords:
    Hashed with Werkzeug's generate_password_hash, which salts every hash
    with fresh random bytes. Only the hash is stored; login recomputes it
    with check_password_hash.

Uniqueness:
    register() reads for an existing username or email before inserting.
    The read and the insert are separate statements, so two concurrent
    registrations can both pass the read; the UNIQUE constraints then
    reject the second insert, and that IntegrityError is reported as the
    same 400 conflict as the pre-check.
"""

import logging

import pydantic
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from shopdesk.database import describe_error
from shopdesk.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ValidationError,
)
from shopdesk.models.user import User
from shopdesk.schemas.user import LoginPayload, LoginResponse, RegisterPayload

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "All fields are required"
DUPLICATE_USER_MESSAGE = "Username or Email already exists"
UNKNOWN_USERNAME_MESSAGE = "Invalid Username!"
WRONG_PASSWORD_MESSAGE = "Invalid Password!"


class UserService:

    async def register(self, db: AsyncSession, fields: dict) -> None:
        """
        Create a user account.

        Raises:
            ValidationError: a field is missing or empty (400)
            ConflictError: username or email already taken (400)
            DatabaseError: store failure (500)
        """
        try:
            payload = RegisterPayload.model_validate(fields)
        except pydantic.ValidationError:
            raise ValidationError(message=MISSING_FIELDS_MESSAGE)
        if not payload.is_complete():
            raise ValidationError(message=MISSING_FIELDS_MESSAGE)

        try:
            result = await db.execute(
                select(User.id).where(
                    or_(User.username == payload.username, User.email == payload.email)
                )
            )
            existing = result.first()
        except SQLAlchemyError as e:
            logger.error("Database error checking user %s: %s", payload.username, describe_error(e))
            raise DatabaseError(message=describe_error(e))

        if existing is not None:
            logger.info("Registration rejected for %s: already exists", payload.username)
            raise ConflictError(message=DUPLICATE_USER_MESSAGE)

        user = User(
            name=payload.name,
            username=payload.username,
            email=payload.email,
            password=generate_password_hash(payload.password),
            address=payload.address,
        )
        try:
            db.add(user)
            await db.flush()
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.info("Registration for %s lost a race on the unique constraint", payload.username)
            raise ConflictError(message=DUPLICATE_USER_MESSAGE)
        except SQLAlchemyError as e:
            logger.error("Database error inserting user %s: %s", payload.username, describe_error(e))
            raise DatabaseError(message=describe_error(e))

        logger.info("User %s registered (id=%s)", user.username, user.id)

    async def login(self, db: AsyncSession, fields: dict) -> LoginResponse:
        """
        Check a username/password pair. No session or token is issued.

        Raises:
            AuthenticationError: unknown username or wrong password (401),
                with a message naming which one
        """
        try:
            payload = LoginPayload.model_validate(fields)
        except pydantic.ValidationError:
            raise AuthenticationError(message=UNKNOWN_USERNAME_MESSAGE)

        try:
            result = await db.execute(select(User).where(User.username == payload.username))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login for %s: %s", payload.username, describe_error(e))
            raise DatabaseError(message=describe_error(e))

        if user is None:
            raise AuthenticationError(message=UNKNOWN_USERNAME_MESSAGE)
        if not check_password_hash(user.password, payload.password or ""):
            raise AuthenticationError(message=WRONG_PASSWORD_MESSAGE)

        logger.info("User %s logged in", user.username)
        return LoginResponse(success=True, message="Login successful!")


user_service = UserService()
