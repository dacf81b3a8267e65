from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from app.models.transaction import TransactionType, TransactionStatus

class TransactionCreate(BaseModel):
    account_id: int = Field(..., alias="accountId")
    transaction_date: date = Field(..., alias="transactionDate")
    type: TransactionType
    item_description: str = Field(..., alias="itemDescription")
    category_id: Optional[int] = None
    shop_name: Optional[str] = Field(None, alias="shopName")
    amount: Decimal = Field(..., gt=0)
    payment_method: Optional[str] = Field(None, alias="paymentMethod")
    status: Optional[TransactionStatus] = None

    class Config:
        populate_by_name = True

class PostedTransaction(BaseModel):
    transactionId: int
    accountId: int
    transactionDate: str
    type: TransactionType
    itemDescription: str
    shopName: Optional[str] = None
    amount: float
    paymentMethod: Optional[str] = None
    status: TransactionStatus
    receiptId: Optional[str] = None
    createdAt: Optional[str] = None
    category_id: Optional[int] = None

class TransactionCreateResponse(BaseModel):
    message: str
    data: PostedTransaction

class TransactionItem(BaseModel):
    transaction_id: int
    account_id: int
    transaction_date: str
    type: TransactionType
    item_description: str
    shop_name: Optional[str] = None
    amount: float
    payment_method: Optional[str] = None
    status: TransactionStatus

class TransactionPage(BaseModel):
    data: List[TransactionItem]
    total: int
    hasMore: bool
