"""
Category API Endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.core.exceptions import NotFound
from app.schemas.category import CategoryListResponse, CategoryResponse
from app.services.category_directory import CategoryDirectory

router = APIRouter()

@router.get("", response_model=CategoryListResponse)
async def list_categories(db: AsyncSession = Depends(get_db)):
    """All categories, by name"""
    categories = await CategoryDirectory(db).list_categories()
    return {
        "success": True,
        "message": "Categories retrieved successfully",
        "data": categories
    }

@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, db: AsyncSession = Depends(get_db)):
    """Single category"""
    category = await CategoryDirectory(db).get_category(category_id)
    if category is None:
        raise NotFound("Category does not exist")
    return {
        "success": True,
        "message": "Category retrieved successfully",
        "data": category
    }
