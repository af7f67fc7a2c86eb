"""
ShopDesk Backend: User Route Handlers
=====================================

What:  POST /register and POST /login.
Why:   Account creation and a credential check for the frontend. Login
       answers with a success flag only; no session or token is issued.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shopdesk.database import get_db_session
from shopdesk.schemas.common import ErrorResponse, MessageResponse
from shopdesk.schemas.user import LoginResponse
from shopdesk.services.upload_service import ParsedUpload, get_upload
from shopdesk.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/register",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing fields, or username/email taken", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Register a user",
)
async def register(
    upload: ParsedUpload = Depends(get_upload),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.register(db=db, fields=upload.fields)
    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Unknown username or wrong password", "model": LoginResponse}},
    summary="Check a username and password",
)
async def login(
    upload: ParsedUpload = Depends(get_upload),
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await user_service.login(db=db, fields=upload.fields)
