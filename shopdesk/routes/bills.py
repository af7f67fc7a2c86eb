"""ShopDesk Backend: Bill Route Handler (GET /getBills)."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shopdesk.database import get_db_session
from shopdesk.schemas.bill import BillResponse
from shopdesk.schemas.common import ErrorResponse
from shopdesk.services.bill_service import bill_service

router = APIRouter(tags=["Bills"])


@router.get(
    "/getBills",
    response_model=List[BillResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all bills",
)
async def get_bills(db: AsyncSession = Depends(get_db_session)) -> List[BillResponse]:
    return await bill_service.list_bills(db=db)
