import itertools
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_db
from app.core.database import Base
from app.core.security import create_access_token
from app.main import app
from app.models import (
    Account,
    AccountType,
    Bill,
    Category,
    Goal,
    Transaction,
    TransactionStatus,
    User,
)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _headers


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    async def _make(email=None, full_name="Test User"):
        n = next(counter)
        user = User(
            full_name=full_name,
            email=email or f"user{n}@example.com",
            username=f"seed-user{n}",
            hashed_password="not-a-real-hash"
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_account(db):
    counter = itertools.count(1)

    async def _make(user, balance="0", account_type=AccountType.CHECKING, bank_name="Test Bank"):
        number = f"00012345{next(counter):04d}"
        account = Account(
            user_id=user.id,
            bank_name=bank_name,
            account_type=account_type,
            account_number_full=number,
            account_number_last_4=number[-4:],
            balance=Decimal(balance)
        )
        db.add(account)
        await db.commit()
        await db.refresh(account)
        return account
    return _make


@pytest.fixture
def make_category(db):
    async def _make(name):
        category = Category(name=name)
        db.add(category)
        await db.commit()
        await db.refresh(category)
        return category
    return _make


@pytest.fixture
def add_transaction(db):
    """Insert a ledger row directly, without touching the account balance"""
    async def _add(account, tx_type, amount, on, category=None, description="item"):
        transaction = Transaction(
            account_id=account.id,
            category_id=category.id if category else None,
            transaction_date=on,
            type=tx_type,
            item_description=description,
            amount=Decimal(str(amount)),
            status=TransactionStatus.COMPLETE
        )
        db.add(transaction)
        await db.commit()
        await db.refresh(transaction)
        return transaction
    return _add


@pytest.fixture
def make_goal(db):
    async def _make(user, goal_type, target, start, end, category=None):
        goal = Goal(
            user_id=user.id,
            goal_type=goal_type,
            category_id=category.id if category else None,
            start_date=start,
            end_date=end,
            target_amount=Decimal(str(target))
        )
        db.add(goal)
        await db.commit()
        await db.refresh(goal)
        return goal
    return _make


@pytest.fixture
def make_bill(db):
    async def _make(user, due, amount, description="Internet", last_charge=None):
        bill = Bill(
            user_id=user.id,
            due_date=due,
            item_description=description,
            last_charge_date=last_charge,
            amount=Decimal(str(amount))
        )
        db.add(bill)
        await db.commit()
        await db.refresh(bill)
        return bill
    return _make
