"""
Bill Tracker
Read-only view of a user's upcoming bills
"""

from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.datetime_utils import format_date, today
from app.core.exceptions import guard_service
from app.core.money import round_money
from app.models.bill import Bill


class BillTracker:

    def __init__(self, db: AsyncSession):
        self.db = db

    @guard_service("Failed to fetch bills")
    async def upcoming_bills(self, user_id: int, reference: Optional[date] = None) -> List[Dict]:
        """Bills due today or later, soonest first"""
        stmt = select(Bill).where(
            and_(
                Bill.user_id == user_id,
                Bill.due_date >= (reference or today())
            )
        ).order_by(Bill.due_date.asc(), Bill.id.asc())

        result = await self.db.execute(stmt)

        return [
            {
                'billId': bill.id,
                'userId': bill.user_id,
                'itemDescription': bill.item_description,
                'logoUrl': bill.logo_url or None,
                'dueDate': format_date(bill.due_date),
                'lastChargeDate': format_date(bill.last_charge_date),
                'amount': round_money(bill.amount)
            }
            for bill in result.scalars().all()
        ]
