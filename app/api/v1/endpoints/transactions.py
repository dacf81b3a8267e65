"""
Transaction API Endpoints
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_current_user_id
from app.config import settings
from app.schemas.transaction import (
    TransactionCreate,
    TransactionCreateResponse,
    TransactionPage
)
from app.services.balance_mutator import BalanceMutator
from app.services.transaction_history import TransactionHistory

router = APIRouter()

@router.get("", response_model=TransactionPage)
async def get_transactions(
    type: str = Query("All", description="All, Revenue or Expense"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the user's transactions, newest first
    """
    return await TransactionHistory(db).list_transactions(user_id, type, limit, offset)

@router.post("", response_model=TransactionCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction: TransactionCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Post a transaction and apply it to the account balance
    """
    return await BalanceMutator(db).post_transaction(user_id, transaction)
