from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.exceptions import ValidationFailed
from app.models import Account, Transaction, TransactionStatus, TransactionType
from app.schemas.transaction import TransactionCreate
from app.services.account_manager import AccountManager
from app.services.balance_mutator import BalanceMutator


def expense(account_id, amount, description="groceries", on=date(2025, 3, 10), **kwargs):
    return TransactionCreate(
        account_id=account_id,
        transaction_date=on,
        type=TransactionType.EXPENSE,
        item_description=description,
        amount=Decimal(str(amount)),
        **kwargs
    )

def revenue(account_id, amount, description="salary"):
    return TransactionCreate(
        account_id=account_id,
        transaction_date=date(2025, 3, 1),
        type=TransactionType.REVENUE,
        item_description=description,
        amount=Decimal(str(amount))
    )

async def balance_of(db, account_id):
    result = await db.execute(select(Account.balance).where(Account.id == account_id))
    return result.scalar_one()

async def transaction_count(db):
    return (await db.execute(select(func.count()).select_from(Transaction))).scalar_one()


async def test_expense_reduces_balance_and_shows_in_detail(db, session_factory, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="1000")

    result = await BalanceMutator(db).post_transaction(user.id, expense(account.id, 200))

    assert result['message'] == 'Transaction created successfully'
    assert result['data']['amount'] == 200.0
    assert result['data']['status'] == TransactionStatus.COMPLETE

    async with session_factory() as fresh:
        detail = await AccountManager(fresh).get_account_detail(account.id, user.id)
    assert detail['balance'] == 800.0
    assert len(detail['recent_transactions']) == 1
    assert detail['recent_transactions'][0]['amount'] == -200.0
    assert detail['recent_transactions'][0]['description'] == "groceries"

async def test_insufficient_funds_is_rejected_without_side_effects(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="100")

    with pytest.raises(ValidationFailed):
        await BalanceMutator(db).post_transaction(user.id, expense(account.id, 150))

    assert await balance_of(db, account.id) == Decimal("100")
    assert await transaction_count(db) == 0
    assert account.balance == Decimal("100")
    assert account.bank_name == "Test Bank"

async def test_balance_tracks_accepted_transactions_only(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="50")
    mutator = BalanceMutator(db)

    await mutator.post_transaction(user.id, revenue(account.id, "100.25"))
    await mutator.post_transaction(user.id, expense(account.id, "30.10"))
    with pytest.raises(ValidationFailed):
        await mutator.post_transaction(user.id, expense(account.id, 1000))
    await mutator.post_transaction(user.id, expense(account.id, "20.15"))

    assert await balance_of(db, account.id) == Decimal("100.00")
    assert await transaction_count(db) == 3

async def test_expense_equal_to_balance_is_allowed(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="75")

    await BalanceMutator(db).post_transaction(user.id, expense(account.id, 75))

    assert await balance_of(db, account.id) == Decimal("0")

async def test_unknown_category_is_rejected(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="500")

    with pytest.raises(ValidationFailed):
        await BalanceMutator(db).post_transaction(user.id, expense(account.id, 10, category_id=999))

    assert await transaction_count(db) == 0

async def test_category_id_zero_means_uncategorized(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="500")

    result = await BalanceMutator(db).post_transaction(user.id, expense(account.id, 10, category_id=0))

    assert result['data']['category_id'] is None

async def test_someone_elses_account_is_rejected(db, make_user, make_account):
    owner = await make_user()
    intruder = await make_user()
    account = await make_account(owner, balance="500")

    with pytest.raises(ValidationFailed):
        await BalanceMutator(db).post_transaction(intruder.id, expense(account.id, 10))

    assert await balance_of(db, account.id) == Decimal("500")

async def test_blank_description_is_rejected(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="500")

    with pytest.raises(ValidationFailed):
        await BalanceMutator(db).post_transaction(user.id, expense(account.id, 10, description="   "))

async def test_explicit_status_is_kept(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="500")

    result = await BalanceMutator(db).post_transaction(
        user.id, expense(account.id, 10, status=TransactionStatus.PENDING)
    )

    assert result['data']['status'] == TransactionStatus.PENDING

async def test_post_transaction_over_http(client, auth_headers, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="1000")

    response = await client.post(
        "/v1/transactions",
        json={
            "accountId": account.id,
            "transactionDate": "2025-03-10",
            "type": "Expense",
            "itemDescription": "groceries",
            "shopName": "Corner Shop",
            "amount": 200
        },
        headers=auth_headers(user.id)
    )
    assert response.status_code == 201
    assert response.json()['data']['accountId'] == account.id

    detail = await client.get(f"/v1/accounts/{account.id}", headers=auth_headers(user.id))
    assert detail.json()['balance'] == 800.0
    assert detail.json()['recent_transactions'][0]['amount'] == -200.0

async def test_post_transaction_over_http_insufficient_funds(client, auth_headers, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="100")

    response = await client.post(
        "/v1/transactions",
        json={
            "accountId": account.id,
            "transactionDate": "2025-03-10",
            "type": "Expense",
            "itemDescription": "groceries",
            "amount": 150
        },
        headers=auth_headers(user.id)
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid or missing transaction data"}

async def test_post_transaction_with_malformed_body(client, auth_headers, make_user):
    user = await make_user()

    response = await client.post(
        "/v1/transactions",
        json={"type": "Expense", "amount": -5},
        headers=auth_headers(user.id)
    )
    assert response.status_code == 400
    body = response.json()
    assert body['success'] is False
    assert any(error['field'] == 'amount' for error in body['errors'])

async def test_rejected_posting_leaves_callers_session_usable(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="10")

    with pytest.raises(ValidationFailed):
        await BalanceMutator(db).post_transaction(user.id, expense(account.id, 20))

    assert account.id is not None
    assert account.balance == Decimal("10")
    assert (await db.get(Account, account.id)) is account

    await BalanceMutator(db).post_transaction(user.id, expense(account.id, 4))
    assert await balance_of(db, account.id) == Decimal("6")

async def test_created_at_is_timezone_aware(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="10")

    result = await BalanceMutator(db).post_transaction(user.id, expense(account.id, 1))

    assert result['data']['createdAt'].endswith("+00:00")
