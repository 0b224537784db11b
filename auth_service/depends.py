from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.token_codec import TokenCodec

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_codec(request: Request) -> TokenCodec:
    """Codec built once by create_app from the configured secrets"""
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> IPasswordHasher:
    return request.app.state.password_hasher


def get_config(request: Request):
    return request.app.state.config
