import enum
from sqlalchemy import Column, Integer, Numeric, Date, Enum, ForeignKey
from app.core.database import Base

class GoalType(str, enum.Enum):
    SAVING = "Saving"
    EXPENSE_LIMIT = "Expense_Limit"

class Goal(Base):
    __tablename__ = "goals"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    goal_type = Column(
        Enum(GoalType, name="goal_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False
    )
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)  # Expense_Limit only
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    target_amount = Column(Numeric(15, 2), nullable=False)
    # achieved / current amounts are derived from the ledger on read
