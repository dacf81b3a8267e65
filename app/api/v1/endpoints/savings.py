"""
Savings Report Endpoints
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_current_user_id
from app.core.datetime_utils import resolve_report_year
from app.schemas.savings import SavingsSummaryResponse
from app.services.aggregation_engine import AggregationEngine

router = APIRouter()

@router.get("/summary", response_model=SavingsSummaryResponse)
async def get_savings_summary(
    year: Optional[str] = Query(None, description="Year to report (defaults to the current year)"),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Net savings per month for the year and the year before it
    """
    return await AggregationEngine(db).get_savings_summary(user_id, resolve_report_year(year))
