"""
Transaction History Service
Paginated, type-filtered listing of a user's ledger
"""

from typing import Dict

from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.datetime_utils import format_date
from app.core.exceptions import ValidationFailed, guard_service
from app.core.money import round_money
from app.models.account import Account
from app.models.transaction import Transaction, TransactionType

TYPE_FILTERS = {
    'All': None,
    'Revenue': TransactionType.REVENUE,
    'Expense': TransactionType.EXPENSE,
}


class TransactionHistory:

    def __init__(self, db: AsyncSession):
        self.db = db

    @guard_service("A system error occurred while loading transactions. Please try again later.")
    async def list_transactions(self, user_id: int, tx_type: str = 'All', limit: int = 10, offset: int = 0) -> Dict:
        """
        Transactions across all of the user's accounts, newest first
        """
        if tx_type not in TYPE_FILTERS:
            raise ValidationFailed("Invalid type parameter")

        account_ids = (await self.db.execute(
            select(Account.id).where(Account.user_id == user_id)
        )).scalars().all()

        if not account_ids:
            return {'data': [], 'total': 0, 'hasMore': False}

        query = select(Transaction).where(Transaction.account_id.in_(account_ids))
        type_filter = TYPE_FILTERS[tx_type]
        if type_filter is not None:
            query = query.where(Transaction.type == type_filter)

        total = (await self.db.execute(
            select(func.count()).select_from(query.subquery())
        )).scalar_one()

        query = query.order_by(
            desc(Transaction.transaction_date), desc(Transaction.id)
        ).offset(offset).limit(limit)
        transactions = (await self.db.execute(query)).scalars().all()

        data = [
            {
                'transaction_id': t.id,
                'account_id': t.account_id,
                'transaction_date': format_date(t.transaction_date),
                'type': t.type,
                'item_description': t.item_description,
                'shop_name': t.shop_name or None,
                'amount': round_money(t.amount),
                'payment_method': t.payment_method or None,
                'status': t.status
            }
            for t in transactions
        ]

        return {
            'data': data,
            'total': total,
            'hasMore': offset + len(transactions) < total
        }
