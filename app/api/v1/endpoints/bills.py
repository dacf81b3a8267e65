"""
Bill API Endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_current_user_id
from app.schemas.bill import BillListResponse
from app.services.bill_tracker import BillTracker

router = APIRouter()

@router.get("", response_model=BillListResponse)
async def get_bills(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Upcoming bills, soonest first
    """
    bills = await BillTracker(db).upcoming_bills(user_id)
    return {"data": bills}
