"""Database models initialization."""

# Import all models to ensure they're registered with SQLAlchemy
from .user import User
from .account import Account, AccountType
from .category import Category
from .transaction import Transaction, TransactionType, TransactionStatus, signed_amount
from .bill import Bill
from .goal import Goal, GoalType

__all__ = [
    "User",
    "Account",
    "AccountType",
    "Category",
    "Transaction",
    "TransactionType",
    "TransactionStatus",
    "signed_amount",
    "Bill",
    "Goal",
    "GoalType"
]
