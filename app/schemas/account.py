from pydantic import BaseModel, Field
from decimal import Decimal
from typing import List, Optional

from app.models.account import AccountType
from app.models.transaction import TransactionType, TransactionStatus

class AccountCreate(BaseModel):
    bank_name: str = Field(..., min_length=1)
    account_type: AccountType
    branch_name: Optional[str] = None
    account_number_full: str = Field(..., min_length=1)
    balance: Decimal = Field(Decimal("0"), ge=0)

class AccountUpdate(BaseModel):
    bank_name: str = Field(..., min_length=1)
    account_type: AccountType
    branch_name: Optional[str] = None
    account_number_full: str = Field(..., min_length=1)
    account_number_last_4: Optional[str] = Field(None, max_length=4)
    balance: Decimal

class AccountSummary(BaseModel):
    id: int
    bank_name: str
    account_type: AccountType
    branch_name: Optional[str] = None
    account_number_last_4: str
    balance: float

class AccountListData(BaseModel):
    user_id: int
    accounts: List[AccountSummary]

class AccountListResponse(BaseModel):
    success: bool = True
    message: str
    data: AccountListData

class AccountCreated(AccountSummary):
    user_id: int

class AccountCreateResponse(BaseModel):
    message: str
    account: AccountCreated

class RecentTransaction(BaseModel):
    date: str
    amount: float  # negative for expenses
    description: str
    status: TransactionStatus
    receipt_id: Optional[str] = None
    type: TransactionType

class AccountDetail(BaseModel):
    id: int
    bank_name: str
    account_type: AccountType
    branch_name: Optional[str] = None
    account_number_full: str
    balance: float
    recent_transactions: List[RecentTransaction]

class AccountUpdated(BaseModel):
    account_id: int
    user_id: int
    bank_name: str
    account_type: AccountType
    branch_name: Optional[str] = None
    account_number_full: str
    account_number_last_4: str
    balance: float

class AccountUpdateResponse(BaseModel):
    message: str
    account: AccountUpdated

class AccountDeleteResponse(BaseModel):
    message: str
    deleted_account_id: int
