import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.api.app import create_app
from auth_service.depends import get_unit_of_work
from auth_service.domain.entities import UserRole
from auth_service.adapter.repositories.user_repository import UserRepository
from tests.fixtures.json_loader import FixtureDataLoader
from tests.utils.factories import ACCESS_SECRET, REFRESH_SECRET

API = "/api/v1"


class IntegrationConfig(ApplicationConfig):
    API_PREFIX = API
    ENABLE_LOGGING_MIDDLEWARE = False
    JWT_ACCESS_SECRET = ACCESS_SECRET
    JWT_REFRESH_SECRET = REFRESH_SECRET
    AUTH_COOKIE_DOMAIN = "test"
    ALLOW_QUERY_TOKEN = False
    BCRYPT_ROUNDS = 4


@pytest.fixture
def test_data():
    return FixtureDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def app():
    return create_app(IntegrationConfig)


@pytest_asyncio.fixture
async def client(app, db_session):
    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register(client, test_data):
    """Register one of the users from test_data.json; returns its payload"""

    async def _register(name: str = "alice") -> dict:
        payload = test_data.get_copy(name)
        response = await client.post(f"{API}/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return payload

    return _register


@pytest.fixture
def login(client, register):
    """Register then log in; returns the login response body"""

    async def _login(name: str = "alice") -> dict:
        payload = await register(name)
        response = await client.post(
            f"{API}/auth/login",
            json={"email": payload["email"], "password": payload["password"]},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest.fixture
def login_admin(client, register, db_session):
    """Register the admin user, promote it in the store, then log in"""

    async def _login_admin() -> dict:
        payload = await register("admin")
        users = UserRepository(db_session)
        user = await users.get_by_email(payload["email"])
        user.role = UserRole.admin
        await users.update(user)
        await db_session.commit()

        response = await client.post(
            f"{API}/auth/login",
            json={"email": payload["email"], "password": payload["password"]},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login_admin
