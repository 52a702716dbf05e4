"""REST-обработчики для товаров."""

import logging
from collections.abc import Sequence
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_manager.core.exceptions import StorageError
from inventory_manager.db.models import Product, ProductCreate, ProductRead
from inventory_manager.db.session import get_db_session
from inventory_manager.services import product_service

router = APIRouter(prefix="/products", tags=["products"])

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("", response_model=list[ProductRead])
async def handle_list_products(session: SessionDep) -> Sequence[Product]:
    """
    Все товары, новые первыми. Фильтрация выполняется на стороне клиента.
    """
    try:
        return await product_service.list_products(session)
    except SQLAlchemyError as e:
        logging.exception("Error in handle_list_products")
        raise StorageError("제품 목록을 불러오는데 실패했습니다.") from e


@router.get("/{product_id}", response_model=ProductRead)
async def handle_get_product(product_id: int, session: SessionDep) -> Product:
    try:
        return await product_service.get_product(session, product_id)
    except SQLAlchemyError as e:
        logging.exception("Error in handle_get_product")
        raise StorageError("제품을 불러오는데 실패했습니다.") from e


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def handle_create_product(data: ProductCreate, session: SessionDep) -> Product:
    """
    Создает товар. Поставщик добавляется в справочник той же транзакцией.
    """
    try:
        return await product_service.create_product(session, data)
    except SQLAlchemyError as e:
        logging.exception("Error in handle_create_product")
        raise StorageError("제품 등록에 실패했습니다.") from e


@router.put("/{product_id}", response_model=ProductRead)
async def handle_update_product(
    product_id: int, data: ProductCreate, session: SessionDep
) -> Product:
    """
    Полная замена полей товара. Частичные обновления не поддерживаются.
    """
    try:
        return await product_service.update_product(session, product_id, data)
    except SQLAlchemyError as e:
        logging.exception("Error in handle_update_product")
        raise StorageError("제품 수정에 실패했습니다.") from e


@router.delete("/{product_id}")
async def handle_delete_product(product_id: int, session: SessionDep) -> dict[str, str]:
    try:
        await product_service.delete_product(session, product_id)
    except SQLAlchemyError as e:
        logging.exception("Error in handle_delete_product")
        raise StorageError("제품 삭제에 실패했습니다.") from e

    logging.info("Product %s deleted", product_id)
    return {"message": "제품이 삭제되었습니다."}
