from pydantic import BaseModel
from typing import List, Optional

class MonthlyExpense(BaseModel):
    month: str  # Jan..Dec
    totalExpense: float

class ExpenseSummaryResponse(BaseModel):
    data: List[MonthlyExpense]

class BreakdownItem(BaseModel):
    item_description: str
    amount: float
    date: str

class CategoryBreakdown(BaseModel):
    category: str
    total: float
    changePercent: Optional[float] = None
    subCategories: List[BreakdownItem]

class ExpenseBreakdownResponse(BaseModel):
    data: List[CategoryBreakdown]
