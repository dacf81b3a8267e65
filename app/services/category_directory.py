"""
Category Directory
The global, flat list of transaction categories
"""

from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import guard_service
from app.models.category import Category


class CategoryDirectory:

    def __init__(self, db: AsyncSession):
        self.db = db

    @guard_service("A system error occurred while loading categories. Please try again later.")
    async def list_categories(self) -> List[Dict]:
        result = await self.db.execute(select(Category).order_by(Category.name.asc()))
        return [
            {'category_id': c.id, 'category_name': c.name}
            for c in result.scalars().all()
        ]

    @guard_service("A system error occurred while loading the category. Please try again later.")
    async def get_category(self, category_id: int) -> Optional[Dict]:
        category = await self.db.get(Category, category_id)
        if category is None:
            return None
        return {'category_id': category.id, 'category_name': category.name}
