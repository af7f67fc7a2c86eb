"""ShopDesk Backend: Bill Service (read-only listing)."""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shopdesk.database import describe_error
from shopdesk.exceptions import DatabaseError
from shopdesk.models.bill import Bill
from shopdesk.schemas.bill import BillResponse

logger = logging.getLogger(__name__)


class BillService:

    async def list_bills(self, db: AsyncSession) -> List[BillResponse]:
        """Every row of the bills table, unfiltered and unpaginated."""
        try:
            result = await db.execute(select(Bill).order_by(Bill.id))
            bills = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing bills: %s", describe_error(e))
            raise DatabaseError(message=describe_error(e))

        return [BillResponse.model_validate(bill) for bill in bills]


bill_service = BillService()
