"""
Balance Mutator
Posts a transaction and applies it to the owning account's balance as a
single unit of work.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.database import UnitOfWork
from app.core.datetime_utils import format_date
from app.core.exceptions import ValidationFailed, guard_service
from app.core.money import round_money, to_decimal
from app.models.account import Account
from app.models.category import Category
from app.models.transaction import Transaction, TransactionType, TransactionStatus, signed_amount
from app.schemas.transaction import TransactionCreate

logger = logging.getLogger(__name__)

INVALID_TRANSACTION = "Invalid or missing transaction data"


class BalanceMutator:
    """
    Inserts transactions and keeps Account.balance in step with them.

    The insufficient-funds check reads the balance inside the unit of work but
    does not lock the row unless ``lock_account_row`` is set, so two concurrent
    expenses against one account can both pass the check.
    """

    def __init__(self, db: AsyncSession, lock_account_row: Optional[bool] = None):
        self.db = db
        self.lock_account_row = settings.ACCOUNT_ROW_LOCK if lock_account_row is None else lock_account_row

    @staticmethod
    def _validate_payload(payload: TransactionCreate) -> None:
        if not payload.item_description or not payload.item_description.strip():
            raise ValidationFailed(INVALID_TRANSACTION)
        if payload.amount is None or to_decimal(payload.amount) <= 0:
            raise ValidationFailed(INVALID_TRANSACTION)
        if payload.type not in (TransactionType.REVENUE, TransactionType.EXPENSE):
            raise ValidationFailed(INVALID_TRANSACTION)

    async def _load_account(self, session: AsyncSession, account_id: int, user_id: int) -> Optional[Account]:
        stmt = select(Account).where(
            and_(
                Account.id == account_id,
                Account.user_id == user_id
            )
        )
        if self.lock_account_row:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @guard_service("A system error occurred while creating the transaction. Please try again later.")
    async def post_transaction(self, user_id: int, payload: TransactionCreate) -> Dict:
        """
        Validate, insert the transaction and update the account balance.
        Nothing is persisted unless every step succeeds.
        """
        amount = to_decimal(payload.amount)
        category_id = payload.category_id or None

        async with UnitOfWork(self.db.bind) as uow:
            session = uow.session

            # 1. Input checks
            self._validate_payload(payload)

            # 2. Category must exist when supplied
            if category_id is not None:
                category = await session.get(Category, category_id)
                if category is None:
                    raise ValidationFailed(INVALID_TRANSACTION)

            # 3. Account must belong to the caller
            account = await self._load_account(session, payload.account_id, user_id)
            if account is None:
                raise ValidationFailed(INVALID_TRANSACTION)

            # 4. Expenses cannot overdraw the account
            current_balance = to_decimal(account.balance)
            if payload.type is TransactionType.EXPENSE and current_balance < amount:
                logger.info(
                    "Rejected expense of %s on account %s: balance %s",
                    amount, account.id, current_balance
                )
                raise ValidationFailed(INVALID_TRANSACTION)

            # 5. Insert the ledger row
            transaction = Transaction(
                account_id=account.id,
                transaction_date=payload.transaction_date,
                type=payload.type,
                item_description=payload.item_description,
                category_id=category_id,
                shop_name=payload.shop_name or None,
                amount=amount,
                payment_method=payload.payment_method or None,
                status=payload.status or TransactionStatus.COMPLETE,
                receipt_id=None
            )
            session.add(transaction)
            await session.flush()

            # 6. Apply it to the balance
            account.balance = current_balance + signed_amount(payload.type, amount)
            await session.flush()

            await uow.commit()

        logger.info(
            "Posted %s %s on account %s (transaction %s)",
            transaction.type.value, amount, transaction.account_id, transaction.id
        )

        return {
            'message': 'Transaction created successfully',
            'data': {
                'transactionId': transaction.id,
                'accountId': transaction.account_id,
                'transactionDate': format_date(transaction.transaction_date),
                'type': transaction.type,
                'itemDescription': transaction.item_description,
                'shopName': transaction.shop_name,
                'amount': round_money(transaction.amount),
                'paymentMethod': transaction.payment_method,
                'status': transaction.status,
                'receiptId': transaction.receipt_id,
                'createdAt': datetime.now(timezone.utc).isoformat(),
                'category_id': transaction.category_id
            }
        }
