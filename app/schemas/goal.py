from pydantic import BaseModel, Field
from decimal import Decimal
from typing import List, Optional

from app.models.goal import GoalType

class GoalCreate(BaseModel):
    goal_type: GoalType
    category_id: Optional[int] = None
    # kept as strings so malformed dates surface as a goal validation error
    start_date: str = Field(..., min_length=1)
    end_date: str = Field(..., min_length=1)
    target_amount: Decimal = Field(..., gt=0)

class GoalUpdate(BaseModel):
    target_amount: Decimal = Field(..., gt=0)

class SavingGoalOut(BaseModel):
    goal_id: int
    goal_type: GoalType
    target_amount: float
    target_achieved: float
    start_date: str
    end_date: str

class ExpenseGoalOut(BaseModel):
    goal_id: int
    category: str
    target_amount: float
    current_expense: float

class GoalsData(BaseModel):
    savingGoal: Optional[SavingGoalOut] = None
    expenseGoals: List[ExpenseGoalOut]

class GoalsResponse(BaseModel):
    success: bool = True
    message: str
    data: GoalsData

class GoalCreateResponse(BaseModel):
    message: str
    goal_id: int

class UpdatedGoal(BaseModel):
    goal_id: int
    target_amount: float

class GoalUpdateResponse(BaseModel):
    message: str
    updated_goal: UpdatedGoal
