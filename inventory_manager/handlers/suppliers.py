"""REST-обработчик справочника поставщиков."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_manager.core.exceptions import StorageError
from inventory_manager.db.models import SupplierRead
from inventory_manager.db.session import get_db_session
from inventory_manager.services import supplier_service

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get("", response_model=list[SupplierRead])
async def handle_list_suppliers(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[SupplierRead]:
    """Имена поставщиков по алфавиту, для подсказок в форме."""
    try:
        names = await supplier_service.list_suppliers(session)
    except SQLAlchemyError as e:
        logging.exception("Error in handle_list_suppliers")
        raise StorageError("구매처 목록을 불러오는데 실패했습니다.") from e
    return [SupplierRead(name=name) for name in names]
