from pydantic import BaseModel
from typing import List

class CategoryOut(BaseModel):
    category_id: int
    category_name: str

class CategoryListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[CategoryOut]

class CategoryResponse(BaseModel):
    success: bool = True
    message: str
    data: CategoryOut
