"""
Expense Report Endpoints
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_current_user_id
from app.core.datetime_utils import is_month_string
from app.core.exceptions import ValidationFailed
from app.schemas.expense import ExpenseBreakdownResponse, ExpenseSummaryResponse
from app.services.aggregation_engine import AggregationEngine

router = APIRouter()

@router.get("/summary", response_model=ExpenseSummaryResponse)
async def get_expense_summary(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Monthly expense totals for the current year
    """
    summary = await AggregationEngine(db).get_expense_summary(user_id)
    return {"data": summary}

@router.get("/breakdown", response_model=ExpenseBreakdownResponse)
async def get_expense_breakdown(
    month: Optional[str] = Query(None, description="Month as YYYY-MM, e.g. 2025-11"),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Expenses by category for a month, compared with the previous month
    """
    if not is_month_string(month):
        raise ValidationFailed("Invalid month parameter. Use the YYYY-MM format (e.g. 2025-11)")

    breakdown = await AggregationEngine(db).get_expense_breakdown(user_id, month)
    return {"data": breakdown}
