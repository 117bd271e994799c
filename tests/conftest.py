import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./money_manager_test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("TIMEZONE", "UTC")

from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from money_manager.core.database import Database
from money_manager.main import app
from money_manager.models.transaction import Division, Transaction, TransactionType
from money_manager.models.user import User
from money_manager.utils.edit_window import utcnow


@pytest.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}").connect()
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
async def session(db):
    async with db.session() as s:
        yield s


@pytest.fixture
async def client(db):
    app.state.db = db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def user(session):
    return await make_user(session, "alice@example.com", "Alice")


async def make_user(session, email: str, name: str) -> User:
    u = User(email=email, hashed_password="not-a-real-hash", name=name)
    session.add(u)
    await session.commit()
    await session.refresh(u)
    return u


async def add_transaction(
    session,
    user_id,
    type: str,
    amount: float,
    date: datetime,
    category: str = "Misc",
    division: str = "personal",
    account: str = "default",
    created_at: datetime = None,
) -> Transaction:
    tx = Transaction(
        user_id=user_id,
        type=TransactionType(type),
        amount=amount,
        category=category,
        division=Division(division),
        description=f"{category} {amount}",
        date=date,
        account=account,
        created_at=created_at or utcnow(),
    )
    session.add(tx)
    await session.commit()
    await session.refresh(tx)
    return tx


async def register(client, email: str = "alice@example.com", name: str = "Alice", password: str = "secret123") -> dict:
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def auth_headers(client):
    body = await register(client)
    return {"Authorization": f"Bearer {body['token']}"}
