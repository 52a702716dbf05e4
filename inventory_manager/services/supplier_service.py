"""Сервисный слой для справочника поставщиков."""

from collections.abc import Sequence

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from inventory_manager.db.models import Supplier, utcnow


def normalize_supplier(name: str | None) -> str | None:
    """Обрезает пробелы; пустое имя считается отсутствующим."""
    if name is None:
        return None
    name = name.strip()
    return name or None


async def upsert_supplier(session: AsyncSession, name: str | None) -> None:
    """
    Добавляет поставщика, если его еще нет (INSERT ... ON CONFLICT DO NOTHING).

    Коммит не выполняется: запись попадает в ту же транзакцию,
    что и последующее сохранение товара.

    Args:
        session: Сессия базы данных.
        name: Имя поставщика. Пустое значение игнорируется.
    """
    name = normalize_supplier(name)
    if name is None:
        return

    dialect = session.get_bind().dialect.name
    insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
    statement = (
        insert(Supplier)
        .values(name=name, created_at=utcnow())
        .on_conflict_do_nothing(index_elements=["name"])
    )
    await session.execute(statement)


async def list_suppliers(session: AsyncSession) -> Sequence[str]:
    """
    Возвращает имена всех поставщиков по алфавиту.

    Args:
        session: Сессия базы данных.

    Returns:
        Последовательность имен.
    """
    statement = select(Supplier.name).order_by(Supplier.name)
    result = await session.execute(statement)
    return result.scalars().all()
