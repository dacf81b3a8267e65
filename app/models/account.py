import enum
from sqlalchemy import Column, Integer, String, Numeric, Enum, ForeignKey
from app.core.database import Base

class AccountType(str, enum.Enum):
    CHECKING = "Checking"
    CREDIT_CARD = "Credit Card"
    SAVINGS = "Savings"
    INVESTMENT = "Investment"
    LOAN = "Loan"

class Account(Base):
    __tablename__ = "accounts"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    bank_name = Column(String(255), nullable=False)
    account_type = Column(
        Enum(AccountType, name="account_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False
    )
    branch_name = Column(String(255), nullable=True)
    account_number_full = Column(String(255), nullable=False)
    account_number_last_4 = Column(String(4), nullable=False)  # cached suffix of the full number
    
    balance = Column(Numeric(15, 2), nullable=False, default=0)
