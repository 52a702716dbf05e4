"""Подключение к базе товаров: пул соединений и сессия на запрос."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from inventory_manager.core.config import settings

# Один пул на процесс. pre_ping отбрасывает соединения, которые
# PostgreSQL закрыл за время простоя.
async_engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,
)

# expire_on_commit=False: после commit обработчик еще сериализует товар
# в ответ, атрибуты не должны перечитываться из закрытой сессии.
AsyncSessionFactory = async_sessionmaker(
    async_engine,
    autoflush=False,
    expire_on_commit=False,
    class_=AsyncSession,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Сессия для одного HTTP-запроса к товарам или поставщикам.

    Upsert поставщика и запись товара идут в этой сессии одной
    транзакцией. При выходе сессия закрывается в любом случае, а
    незакоммиченные изменения (например, после ошибки БД) откатываются.

    Yields:
        Асинхронная сессия SQLAlchemy.
    """
    async with AsyncSessionFactory() as session:
        yield session
