import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Enum, ForeignKey
from datetime import datetime
from app.core.database import Base

class TransactionType(str, enum.Enum):
    REVENUE = "Revenue"
    EXPENSE = "Expense"

class TransactionStatus(str, enum.Enum):
    COMPLETE = "Complete"
    PENDING = "Pending"
    FAILED = "Failed"

class Transaction(Base):
    __tablename__ = "transactions"
    
    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    
    transaction_date = Column(Date, nullable=False, index=True)
    type = Column(
        Enum(TransactionType, name="transaction_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False
    )
    item_description = Column(String(500), nullable=False)
    shop_name = Column(String(255), nullable=True)
    amount = Column(Numeric(15, 2), nullable=False)  # always positive, sign comes from type
    payment_method = Column(String(100), nullable=True)
    status = Column(
        Enum(TransactionStatus, name="transaction_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=TransactionStatus.PENDING
    )
    receipt_id = Column(String(255), nullable=True)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


def signed_amount(tx_type: TransactionType, amount):
    """Amount as it affects the account balance: expenses are negative"""
    if tx_type is TransactionType.EXPENSE:
        return -amount
    if tx_type is TransactionType.REVENUE:
        return amount
    raise ValueError(f"Unhandled transaction type: {tx_type!r}")
