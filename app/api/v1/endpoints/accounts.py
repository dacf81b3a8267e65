"""
Account API Endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_current_user_id
from app.schemas.account import (
    AccountCreate,
    AccountCreateResponse,
    AccountDeleteResponse,
    AccountDetail,
    AccountListResponse,
    AccountUpdate,
    AccountUpdateResponse
)
from app.services.account_manager import AccountManager

router = APIRouter()

@router.get("", response_model=AccountListResponse)
async def list_accounts(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    List the current user's accounts
    """
    accounts = await AccountManager(db).list_accounts(user_id)
    return {
        "success": True,
        "message": "Accounts retrieved successfully",
        "data": {"user_id": user_id, "accounts": accounts}
    }

@router.post("", response_model=AccountCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    account: AccountCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Link a new bank account
    """
    created = await AccountManager(db).create_account(user_id, account)
    return {"message": "Account created successfully", "account": created}

@router.get("/{account_id}", response_model=AccountDetail)
async def get_account(
    account_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Account detail with its 5 most recent transactions
    """
    return await AccountManager(db).get_account_detail(account_id, user_id)

@router.put("/{account_id}", response_model=AccountUpdateResponse)
async def update_account(
    account_id: int,
    update_data: AccountUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Replace the account's details
    """
    updated = await AccountManager(db).update_account(account_id, user_id, update_data)
    return {"message": "Account updated successfully", "account": updated}

@router.delete("/{account_id}", response_model=AccountDeleteResponse)
async def delete_account(
    account_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete the account together with all of its transactions
    """
    result = await AccountManager(db).delete_account(account_id, user_id)
    return {
        "message": "Account deleted successfully",
        "deleted_account_id": result["deleted_account_id"]
    }
