"""Сервисный слой для управления товарами."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from inventory_manager.core.exceptions import ProductNotFoundError
from inventory_manager.db.models import Product, ProductCreate, utcnow
from inventory_manager.services import supplier_service

PRODUCT_NOT_FOUND_MESSAGE = "제품을 찾을 수 없습니다."


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def _prepare_fields(data: ProductCreate) -> dict[str, Any]:
    """
    Приводит тело запроса к значениям для записи.

    Необязательные текстовые поля: пустая строка -> None.
    Количество: null -> 0.
    """
    return {
        "name": data.name,
        "image_url": _blank_to_none(data.image_url),
        "purchase_price": data.purchase_price,
        "sale_price": data.sale_price,
        "margin_rate": data.margin_rate,
        "quantity": data.quantity or 0,
        "link": _blank_to_none(data.link),
        "supplier": supplier_service.normalize_supplier(data.supplier),
        "purchase_date": data.purchase_date,
    }


async def _get_or_raise(session: AsyncSession, product_id: int) -> Product:
    db_product = await session.get(Product, product_id)
    if db_product is None:
        raise ProductNotFoundError(PRODUCT_NOT_FOUND_MESSAGE)
    return db_product


async def list_products(session: AsyncSession) -> Sequence[Product]:
    """
    Возвращает список всех товаров, новые первыми.

    Args:
        session: Сессия базы данных.

    Returns:
        Последовательность объектов Product.
    """
    statement = select(Product).order_by(
        col(Product.created_at).desc(), col(Product.id).desc()
    )
    result = await session.execute(statement)
    return result.scalars().all()


async def get_product(session: AsyncSession, product_id: int) -> Product:
    """
    Находит товар по ID.

    Raises:
        ProductNotFoundError: Если товара нет.
    """
    return await _get_or_raise(session, product_id)


async def create_product(session: AsyncSession, data: ProductCreate) -> Product:
    """
    Создает новый товар в базе данных.

    Перед вставкой поставщик добавляется в справочник; обе записи
    фиксируются одним коммитом.

    Args:
        session: Сессия базы данных.
        data: Проверенные данные товара.

    Returns:
        Созданный объект товара с ID и временными метками.
    """
    fields = _prepare_fields(data)
    await supplier_service.upsert_supplier(session, fields["supplier"])

    db_product = Product(**fields)
    session.add(db_product)
    await session.commit()
    await session.refresh(db_product)
    return db_product


async def update_product(
    session: AsyncSession, product_id: int, data: ProductCreate
) -> Product:
    """
    Полностью заменяет изменяемые поля товара.

    Args:
        session: Сессия базы данных.
        product_id: ID товара для обновления.
        data: Полный набор полей товара.

    Returns:
        Обновленный объект Product.

    Raises:
        ProductNotFoundError: Если товар не найден.
    """
    db_product = await _get_or_raise(session, product_id)

    fields = _prepare_fields(data)
    await supplier_service.upsert_supplier(session, fields["supplier"])

    for key, value in fields.items():
        setattr(db_product, key, value)
    db_product.updated_at = utcnow()

    session.add(db_product)
    await session.commit()
    await session.refresh(db_product)
    return db_product


async def delete_product(session: AsyncSession, product_id: int) -> None:
    """
    Удаляет товар без возможности восстановления.

    Raises:
        ProductNotFoundError: Если товар не найден.
    """
    db_product = await _get_or_raise(session, product_id)
    await session.delete(db_product)
    await session.commit()
