from pydantic import BaseModel
from typing import List

class MonthlySavings(BaseModel):
    month: str  # 01..12
    amount: float

class YearlySavings(BaseModel):
    this_year: List[MonthlySavings]
    last_year: List[MonthlySavings]

class SavingsSummaryResponse(BaseModel):
    user_id: int
    year: int
    summary: YearlySavings
