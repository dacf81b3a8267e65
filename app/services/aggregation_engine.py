"""
Aggregation Engine
Time-windowed sums over the transaction ledger: monthly expense totals,
per-category breakdowns with month-over-month change, and yearly net savings.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select, func, and_, extract
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.datetime_utils import (
    format_date,
    month_bounds,
    month_label,
    parse_month,
    previous_month,
    today,
)
from app.core.exceptions import NotFound, guard_service
from app.core.money import percent_change, round_money, to_decimal
from app.models.account import Account
from app.models.category import Category
from app.models.transaction import Transaction, TransactionType

UNCATEGORIZED = "Uncategorized"
UNKNOWN_CATEGORY = "Unknown"
NO_MONTH_DATA = "No expense data for this month."


def category_key(category_id: Optional[int]) -> Optional[int]:
    """Ledger rows with no category (NULL or the legacy 0) share one bucket"""
    return category_id or None


def category_display_name(category_id: Optional[int], names: Dict[int, str]) -> str:
    if category_id is None:
        return UNCATEGORIZED
    return names.get(category_id, UNKNOWN_CATEGORY)


class AggregationEngine:
    """
    Computes reporting aggregates for a user's accounts
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_account_ids(self, user_id: int) -> List[int]:
        stmt = select(Account.id).where(Account.user_id == user_id).order_by(Account.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def sum_transactions(
        self,
        account_ids: List[int],
        tx_type: TransactionType,
        start_date: date,
        end_date: date,
        category_id: Optional[int] = None
    ) -> Decimal:
        """
        Sum of amounts of one transaction type inside [start_date, end_date]
        """
        if not account_ids:
            return Decimal("0")

        conditions = [
            Transaction.account_id.in_(account_ids),
            Transaction.type == tx_type,
            Transaction.transaction_date >= start_date,
            Transaction.transaction_date <= end_date
        ]
        if category_id is not None:
            conditions.append(Transaction.category_id == category_id)

        stmt = select(func.coalesce(func.sum(Transaction.amount), 0)).where(and_(*conditions))
        result = await self.db.execute(stmt)
        return to_decimal(result.scalar())

    async def net_savings(self, account_ids: List[int], start_date: date, end_date: date) -> Decimal:
        """Net savings = Revenue - Expense over the window"""
        revenue = await self.sum_transactions(account_ids, TransactionType.REVENUE, start_date, end_date)
        expense = await self.sum_transactions(account_ids, TransactionType.EXPENSE, start_date, end_date)
        return revenue - expense

    async def lookup_category_names(self, category_ids: Iterable[int]) -> Dict[int, str]:
        """Batch lookup of category names by id"""
        ids = sorted({cid for cid in category_ids if cid is not None})
        if not ids:
            return {}
        stmt = select(Category.id, Category.name).where(Category.id.in_(ids))
        result = await self.db.execute(stmt)
        return {row.id: row.name for row in result}

    async def _expenses_between(self, account_ids: List[int], start_date: date, end_date: date):
        stmt = select(
            Transaction.id,
            Transaction.category_id,
            Transaction.item_description,
            Transaction.amount,
            Transaction.transaction_date
        ).where(
            and_(
                Transaction.account_id.in_(account_ids),
                Transaction.type == TransactionType.EXPENSE,
                Transaction.transaction_date >= start_date,
                Transaction.transaction_date <= end_date
            )
        ).order_by(Transaction.transaction_date.asc(), Transaction.id.asc())

        result = await self.db.execute(stmt)
        return result.all()

    @guard_service("Unable to load expense data.")
    async def get_expense_summary(self, user_id: int, year: Optional[int] = None) -> List[Dict]:
        """
        Expense totals per calendar month of the year (current year by default).

        Months without expenses are left out rather than zero-filled.
        """
        account_ids = await self.get_account_ids(user_id)
        if not account_ids:
            return []

        year = year or today().year
        start_of_year, _ = month_bounds(year, 1)
        _, end_of_year = month_bounds(year, 12)

        month_col = extract('month', Transaction.transaction_date)
        stmt = select(
            month_col.label('month'),
            func.sum(Transaction.amount).label('total')
        ).where(
            and_(
                Transaction.account_id.in_(account_ids),
                Transaction.type == TransactionType.EXPENSE,
                Transaction.transaction_date >= start_of_year,
                Transaction.transaction_date <= end_of_year
            )
        ).group_by(month_col).order_by(month_col)

        result = await self.db.execute(stmt)

        return [
            {
                'month': month_label(int(row.month)),
                'totalExpense': round_money(row.total)
            }
            for row in result
        ]

    @guard_service("Unable to load the expense breakdown.")
    async def get_expense_breakdown(self, user_id: int, month: str) -> List[Dict]:
        """
        Per-category expense breakdown for a YYYY-MM month, compared with the
        month before it. Sorted by total, largest first.
        """
        account_ids = await self.get_account_ids(user_id)
        if not account_ids:
            raise NotFound(NO_MONTH_DATA)

        parsed = parse_month(month)
        if parsed is None:
            raise NotFound(NO_MONTH_DATA)
        year, month_num = parsed

        current_start, current_end = month_bounds(year, month_num)
        previous_start, previous_end = month_bounds(*previous_month(year, month_num))

        current_rows = await self._expenses_between(account_ids, current_start, current_end)
        previous_rows = await self._expenses_between(account_ids, previous_start, previous_end)

        if not current_rows:
            raise NotFound(NO_MONTH_DATA)

        # Group this month's expenses: total plus every line item
        current_groups: Dict[Optional[int], Dict] = {}
        for row in current_rows:
            group = current_groups.setdefault(
                category_key(row.category_id),
                {'total': Decimal("0"), 'items': []}
            )
            group['total'] += to_decimal(row.amount)
            group['items'].append(row)

        # Last month only needs the totals
        previous_totals: Dict[Optional[int], Decimal] = {}
        for row in previous_rows:
            key = category_key(row.category_id)
            previous_totals[key] = previous_totals.get(key, Decimal("0")) + to_decimal(row.amount)

        names = await self.lookup_category_names(current_groups.keys())

        breakdown = []
        for key, group in current_groups.items():
            total = group['total']
            breakdown.append({
                'category': category_display_name(key, names),
                'total': round_money(total),
                'changePercent': percent_change(total, previous_totals.get(key, Decimal("0"))),
                'subCategories': [
                    {
                        'item_description': item.item_description,
                        'amount': round_money(item.amount),
                        'date': format_date(item.transaction_date)
                    }
                    for item in group['items']
                ]
            })

        breakdown.sort(key=lambda entry: entry['total'], reverse=True)
        return breakdown

    async def monthly_net_savings(self, account_ids: List[int], year: int) -> List[Dict]:
        """
        Net savings for each of the 12 months of a year, zero-filled
        """
        totals = {
            (month, tx_type): Decimal("0")
            for month in range(1, 13)
            for tx_type in TransactionType
        }

        if account_ids:
            start_of_year, _ = month_bounds(year, 1)
            _, end_of_year = month_bounds(year, 12)

            month_col = extract('month', Transaction.transaction_date)
            stmt = select(
                month_col.label('month'),
                Transaction.type,
                func.sum(Transaction.amount).label('total')
            ).where(
                and_(
                    Transaction.account_id.in_(account_ids),
                    Transaction.transaction_date >= start_of_year,
                    Transaction.transaction_date <= end_of_year
                )
            ).group_by(month_col, Transaction.type)

            result = await self.db.execute(stmt)
            for row in result:
                totals[(int(row.month), row.type)] = to_decimal(row.total)

        return [
            {
                'month': f"{month:02d}",
                'amount': round_money(
                    totals[(month, TransactionType.REVENUE)] - totals[(month, TransactionType.EXPENSE)]
                )
            }
            for month in range(1, 13)
        ]

    @guard_service("An internal server error occurred while processing the savings summary.")
    async def get_savings_summary(self, user_id: int, year: int) -> Dict:
        """
        Monthly net savings for the requested year and the year before it
        """
        # With no accounts both years come back all-zero without a ledger query
        account_ids = await self.get_account_ids(user_id)

        return {
            'user_id': user_id,
            'year': year,
            'summary': {
                'this_year': await self.monthly_net_savings(account_ids, year),
                'last_year': await self.monthly_net_savings(account_ids, year - 1)
            }
        }
