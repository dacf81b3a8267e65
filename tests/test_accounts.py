from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select

from app.core.exceptions import Conflict, Forbidden, NotFound, ValidationFailed
from app.models import Account, AccountType, Transaction, TransactionStatus, TransactionType
from app.schemas.account import AccountCreate, AccountUpdate
from app.services.account_manager import AccountManager


async def test_create_account_caches_last_four(db, make_user):
    user = await make_user()

    created = await AccountManager(db).create_account(user.id, AccountCreate(
        bank_name="First Bank",
        account_type=AccountType.SAVINGS,
        account_number_full="9876543210",
        balance=Decimal("250.50")
    ))

    assert created['user_id'] == user.id
    assert created['account_number_last_4'] == "3210"
    assert created['balance'] == 250.5

async def test_duplicate_account_number_conflicts(db, make_user):
    user = await make_user()
    manager = AccountManager(db)
    payload = AccountCreate(bank_name="First Bank", account_type=AccountType.CHECKING, account_number_full="111122223333")

    await manager.create_account(user.id, payload)
    with pytest.raises(Conflict):
        await manager.create_account(user.id, payload)

async def test_same_number_allowed_for_different_users(db, make_user):
    manager = AccountManager(db)
    payload = AccountCreate(bank_name="First Bank", account_type=AccountType.CHECKING, account_number_full="111122223333")

    await manager.create_account((await make_user()).id, payload)
    await manager.create_account((await make_user()).id, payload)

async def test_list_accounts_is_scoped_to_user(db, make_user, make_account):
    alice = await make_user()
    bob = await make_user()
    await make_account(alice, balance="10")
    await make_account(alice, balance="20")
    await make_account(bob, balance="30")

    accounts = await AccountManager(db).list_accounts(alice.id)

    assert [a['balance'] for a in accounts] == [10.0, 20.0]
    assert all('account_number_full' not in a for a in accounts)

async def test_detail_shows_five_most_recent(db, make_user, make_account, add_transaction):
    user = await make_user()
    account = await make_account(user, balance="1000")
    for day in range(1, 8):
        await add_transaction(account, TransactionType.REVENUE, day, date(2025, 5, day), description=f"day {day}")

    detail = await AccountManager(db).get_account_detail(account.id, user.id)

    assert [t['date'] for t in detail['recent_transactions']] == [
        "2025-05-07", "2025-05-06", "2025-05-05", "2025-05-04", "2025-05-03"
    ]
    assert detail['recent_transactions'][0]['amount'] == 7.0
    assert detail['recent_transactions'][0]['type'] == TransactionType.REVENUE
    assert detail['recent_transactions'][0]['status'] == TransactionStatus.COMPLETE

async def test_detail_distinguishes_missing_from_foreign(db, make_user, make_account):
    owner = await make_user()
    other = await make_user()
    account = await make_account(owner)
    manager = AccountManager(db)

    with pytest.raises(NotFound):
        await manager.get_account_detail(account.id + 100, owner.id)
    with pytest.raises(Forbidden):
        await manager.get_account_detail(account.id, other.id)

async def test_update_account_replaces_fields(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="10")

    updated = await AccountManager(db).update_account(account.id, user.id, AccountUpdate(
        bank_name="Renamed Bank",
        account_type=AccountType.INVESTMENT,
        account_number_full="5555666677778888",
        balance=Decimal("42")
    ))

    assert updated['bank_name'] == "Renamed Bank"
    assert updated['account_number_last_4'] == "8888"
    assert updated['balance'] == 42.0

async def test_update_account_rejects_negative_balance(db, make_user, make_account):
    user = await make_user()
    account = await make_account(user, balance="10")

    with pytest.raises(ValidationFailed):
        await AccountManager(db).update_account(account.id, user.id, AccountUpdate(
            bank_name="Bank",
            account_type=AccountType.CHECKING,
            account_number_full="1234",
            balance=Decimal("-1")
        ))

async def test_update_may_reuse_a_number_from_another_account(db, make_user, make_account):
    user = await make_user()
    first = await make_account(user)
    second = await make_account(user)

    updated = await AccountManager(db).update_account(second.id, user.id, AccountUpdate(
        bank_name="Bank",
        account_type=AccountType.CHECKING,
        account_number_full=first.account_number_full,
        balance=Decimal("0")
    ))

    assert updated['account_number_full'] == first.account_number_full
    assert updated['account_number_last_4'] == first.account_number_last_4

async def test_update_someone_elses_account_is_forbidden(db, make_user, make_account):
    owner = await make_user()
    other = await make_user()
    account = await make_account(owner)

    with pytest.raises(Forbidden):
        await AccountManager(db).update_account(account.id, other.id, AccountUpdate(
            bank_name="Bank",
            account_type=AccountType.CHECKING,
            account_number_full="1234",
            balance=Decimal("0")
        ))

async def test_delete_account_cascades_to_its_transactions_only(db, make_user, make_account, add_transaction):
    user = await make_user()
    doomed = await make_account(user, balance="100")
    kept = await make_account(user, balance="100")
    await add_transaction(doomed, TransactionType.EXPENSE, 10, date(2025, 1, 5))
    await add_transaction(doomed, TransactionType.REVENUE, 20, date(2025, 1, 6))
    survivor = await add_transaction(kept, TransactionType.EXPENSE, 30, date(2025, 1, 7))

    result = await AccountManager(db).delete_account(doomed.id, user.id)

    assert result == {'deleted_account_id': doomed.id}
    assert (await db.execute(select(Account.id).where(Account.id == doomed.id))).scalar_one_or_none() is None
    remaining = (await db.execute(select(Transaction.id))).scalars().all()
    assert remaining == [survivor.id]

async def test_delete_foreign_or_missing_account_is_not_found(db, make_user, make_account, add_transaction):
    owner = await make_user()
    other = await make_user()
    account = await make_account(owner)
    await add_transaction(account, TransactionType.REVENUE, 5, date(2025, 1, 1))
    manager = AccountManager(db)

    with pytest.raises(NotFound):
        await manager.delete_account(account.id, other.id)
    with pytest.raises(NotFound):
        await manager.delete_account(account.id + 100, owner.id)

    assert (await db.execute(select(Account.id).where(Account.id == account.id))).scalar_one() == account.id
    assert account.user_id == owner.id
    assert len((await db.execute(select(Transaction.id))).scalars().all()) == 1


async def test_account_crud_over_http(client, auth_headers, make_user):
    user = await make_user()
    headers = auth_headers(user.id)
    body = {
        "bank_name": "First Bank",
        "account_type": "Credit Card",
        "account_number_full": "4000123412341234",
        "balance": 300
    }

    created = await client.post("/v1/accounts", json=body, headers=headers)
    assert created.status_code == 201
    account_id = created.json()['account']['id']
    assert created.json()['account']['account_type'] == "Credit Card"

    duplicate = await client.post("/v1/accounts", json=body, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.json()['success'] is False

    listing = await client.get("/v1/accounts", headers=headers)
    assert listing.status_code == 200
    assert listing.json()['data']['user_id'] == user.id
    assert listing.json()['data']['accounts'][0]['account_number_last_4'] == "1234"

    updated = await client.put(
        f"/v1/accounts/{account_id}",
        json={**body, "bank_name": "Second Bank"},
        headers=headers
    )
    assert updated.status_code == 200
    assert updated.json()['account']['bank_name'] == "Second Bank"

    deleted = await client.delete(f"/v1/accounts/{account_id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()['deleted_account_id'] == account_id

    gone = await client.get(f"/v1/accounts/{account_id}", headers=headers)
    assert gone.status_code == 404

async def test_foreign_account_over_http(client, auth_headers, make_user, make_account):
    owner = await make_user()
    other = await make_user()
    account = await make_account(owner)

    detail = await client.get(f"/v1/accounts/{account.id}", headers=auth_headers(other.id))
    assert detail.status_code == 403

    deleted = await client.delete(f"/v1/accounts/{account.id}", headers=auth_headers(other.id))
    assert deleted.status_code == 404
