"""Готовое к отображению представление списка товаров."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_manager.core.exceptions import StorageError
from inventory_manager.db.models import ProductRead
from inventory_manager.db.session import get_db_session
from inventory_manager.presentation.catalog import (
    CatalogView,
    CatalogViewState,
    SortDirection,
    SortField,
    ViewMode,
    build_catalog_view,
)
from inventory_manager.services import product_service

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogView)
async def handle_catalog(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    search: str = "",
    supplier: str | None = None,
    supplier_query: str = "",
    sort_field: SortField | None = None,
    sort_direction: SortDirection = SortDirection.ASC,
    view_mode: ViewMode = ViewMode.GRID,
) -> CatalogView:
    """
    Список с примененными поиском, фильтром и сортировкой, маржой и
    бейджами остатка. Состояние передается целиком в параметрах запроса.
    """
    state = CatalogViewState(
        search=search,
        supplier=supplier or None,
        supplier_query=supplier_query,
        sort_field=sort_field,
        sort_direction=sort_direction,
        view_mode=view_mode,
    )
    try:
        products = await product_service.list_products(session)
    except SQLAlchemyError as e:
        logging.exception("Error in handle_catalog")
        raise StorageError("제품 목록을 불러오는데 실패했습니다.") from e

    return build_catalog_view(
        [ProductRead.model_validate(product) for product in products], state
    )
