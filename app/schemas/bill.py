from pydantic import BaseModel
from typing import List, Optional

class BillOut(BaseModel):
    billId: int
    userId: int
    itemDescription: str
    logoUrl: Optional[str] = None
    dueDate: str
    lastChargeDate: Optional[str] = None
    amount: float

class BillListResponse(BaseModel):
    data: List[BillOut]
