"""ShopDesk Backend: Bill response schema."""

from typing import Optional

from pydantic import BaseModel

from shopdesk.schemas.common import Number


class BillResponse(BaseModel):
    id: int
    date: Optional[str] = None
    total_amount: Optional[Number] = None

    model_config = {"from_attributes": True}
