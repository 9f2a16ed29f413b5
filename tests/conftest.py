import datetime as dt
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from finance_ledger import operations
from finance_ledger.database import create_db_and_tables
from finance_ledger.models.enums import AccountType, TransactionType
from finance_ledger.models.user import User
from finance_ledger.schemas.account import AccountCreate
from finance_ledger.schemas.transaction import TransactionCreate


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


def _make_user(session, username):
    user = User(id=uuid4(), username=username, hashed_pin="not-a-real-hash")
    session.add(user)
    session.commit()
    return user.id


@pytest.fixture
def owner_id(session):
    return _make_user(session, "agent-one")


@pytest.fixture
def other_owner_id(session):
    return _make_user(session, "agent-two")


@pytest.fixture
def make_account(session, owner_id):
    def _make(name="Everyday", balance="0.00", type=AccountType.day_to_day, owner=None, **extra):
        result = operations.create_account(
            session,
            owner or owner_id,
            AccountCreate(name=name, balance=Decimal(balance), type=type, **extra),
        )
        assert result.success, result.error
        return result.data
    return _make


@pytest.fixture
def post(session, owner_id):
    """Records a transaction for the default owner and returns it."""
    def _post(type, amount, account, category="Food & Dining", to_account=None, date=dt.date(2025, 3, 14), owner=None):
        result = operations.create_transaction(
            session,
            owner or owner_id,
            TransactionCreate(
                type=TransactionType(type),
                amount=Decimal(amount),
                category=category,
                account_id=account.id,
                to_account_id=to_account.id if to_account else None,
                date=date,
            ),
        )
        assert result.success, result.error
        return result.data
    return _post
