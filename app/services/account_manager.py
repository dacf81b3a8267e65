"""
Account Lifecycle Manager
Create, read, update and delete bank accounts; deletes cascade to the
account's transactions.
"""

import logging
from typing import Dict, List

from sqlalchemy import select, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import UnitOfWork
from app.core.datetime_utils import format_date
from app.core.exceptions import Conflict, Forbidden, NotFound, ValidationFailed, guard_service
from app.core.money import round_money, to_decimal
from app.models.account import Account
from app.models.transaction import Transaction, signed_amount
from app.schemas.account import AccountCreate, AccountUpdate

logger = logging.getLogger(__name__)

RECENT_TRANSACTION_LIMIT = 5
ACCOUNT_NOT_FOUND = "Account not found."
DELETE_NOT_FOUND = "Account not found or not owned by current user"


def last_four(account_number_full: str) -> str:
    return account_number_full[-4:]


class AccountManager:
    """
    Account lifecycle operations scoped to the requesting user
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_owned_account(self, account_id: int, user_id: int, action: str) -> Account:
        """
        Load an account, telling "missing" (NotFound) apart from
        "someone else's" (Forbidden).
        """
        account = await self.db.get(Account, account_id)
        if account is None:
            raise NotFound(ACCOUNT_NOT_FOUND)
        if account.user_id != user_id:
            raise Forbidden(f"You do not have permission to {action} this account.")
        return account

    @guard_service("A system error occurred. Please try again later.")
    async def list_accounts(self, user_id: int) -> List[Dict]:
        """All accounts of a user, oldest first, without the full number"""
        stmt = select(Account).where(Account.user_id == user_id).order_by(Account.id.asc())
        result = await self.db.execute(stmt)

        return [
            {
                'id': account.id,
                'bank_name': account.bank_name,
                'account_type': account.account_type,
                'branch_name': account.branch_name or None,
                'account_number_last_4': account.account_number_last_4,
                'balance': round_money(account.balance)
            }
            for account in result.scalars().all()
        ]

    @guard_service("Unable to add the account right now. Please try again later.")
    async def create_account(self, user_id: int, payload: AccountCreate) -> Dict:
        stmt = select(Account.id).where(
            and_(
                Account.user_id == user_id,
                Account.account_number_full == payload.account_number_full
            )
        )
        result = await self.db.execute(stmt)
        if result.scalar_one_or_none() is not None:
            raise Conflict("This account already exists in your list.")

        account = Account(
            user_id=user_id,
            bank_name=payload.bank_name,
            account_type=payload.account_type,
            branch_name=payload.branch_name or None,
            account_number_full=payload.account_number_full,
            account_number_last_4=last_four(payload.account_number_full),
            balance=to_decimal(payload.balance)
        )
        self.db.add(account)
        await self.db.commit()
        await self.db.refresh(account)

        logger.info("Created account %s for user %s", account.id, user_id)

        return {
            'id': account.id,
            'user_id': account.user_id,
            'bank_name': account.bank_name,
            'account_type': account.account_type,
            'branch_name': account.branch_name or None,
            'account_number_last_4': account.account_number_last_4,
            'balance': round_money(account.balance)
        }

    @guard_service("A system error occurred while loading the account. Please try again later.")
    async def get_account_detail(self, account_id: int, user_id: int) -> Dict:
        """
        Account with its most recent transactions; expense amounts are
        presented as negative numbers.
        """
        account = await self._get_owned_account(account_id, user_id, "view")

        stmt = select(Transaction).where(
            Transaction.account_id == account.id
        ).order_by(
            Transaction.transaction_date.desc(),
            Transaction.id.desc()
        ).limit(RECENT_TRANSACTION_LIMIT)
        result = await self.db.execute(stmt)

        recent = [
            {
                'date': format_date(txn.transaction_date),
                'amount': round_money(signed_amount(txn.type, to_decimal(txn.amount))),
                'description': txn.item_description or '',
                'status': txn.status,
                'receipt_id': txn.receipt_id or None,
                'type': txn.type
            }
            for txn in result.scalars().all()
        ]

        return {
            'id': account.id,
            'bank_name': account.bank_name,
            'account_type': account.account_type,
            'branch_name': account.branch_name or None,
            'account_number_full': account.account_number_full,
            'balance': round_money(account.balance),
            'recent_transactions': recent
        }

    @guard_service("An error occurred while saving. Please try again later.")
    async def update_account(self, account_id: int, user_id: int, payload: AccountUpdate) -> Dict:
        """Full replacement of the editable account fields"""
        account = await self._get_owned_account(account_id, user_id, "edit")

        if not payload.bank_name or not payload.bank_name.strip():
            raise ValidationFailed("Bank name must not be empty.")
        if not payload.account_type:
            raise ValidationFailed("Account type must not be empty.")
        if not payload.account_number_full or not payload.account_number_full.strip():
            raise ValidationFailed("Full account number must not be empty.")
        if to_decimal(payload.balance) < 0:
            raise ValidationFailed("balance must not be less than 0")

        account.bank_name = payload.bank_name
        account.account_type = payload.account_type
        account.branch_name = payload.branch_name or None
        account.account_number_full = payload.account_number_full
        account.account_number_last_4 = payload.account_number_last_4 or last_four(payload.account_number_full)
        account.balance = to_decimal(payload.balance)

        await self.db.commit()
        await self.db.refresh(account)

        logger.info("Updated account %s for user %s", account.id, user_id)

        return {
            'account_id': account.id,
            'user_id': account.user_id,
            'bank_name': account.bank_name,
            'account_type': account.account_type,
            'branch_name': account.branch_name or None,
            'account_number_full': account.account_number_full,
            'account_number_last_4': account.account_number_last_4,
            'balance': round_money(account.balance)
        }

    @guard_service("A system error occurred; the account and its transactions could not be deleted.")
    async def delete_account(self, account_id: int, user_id: int) -> Dict:
        """
        Delete an account and all of its transactions atomically.

        A missing account and another user's account are reported the same
        way so the existence of other users' accounts is not revealed.
        """
        async with UnitOfWork(self.db.bind) as uow:
            session = uow.session

            account = await session.get(Account, account_id)
            if account is None or account.user_id != user_id:
                raise NotFound(DELETE_NOT_FOUND)

            await session.execute(delete(Transaction).where(Transaction.account_id == account_id))
            await session.execute(delete(Account).where(Account.id == account_id))

            await uow.commit()

        logger.info("Deleted account %s and its transactions for user %s", account_id, user_id)

        return {'deleted_account_id': account_id}
