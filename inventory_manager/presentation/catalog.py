"""Представление списка товаров: поиск, фильтр по поставщику, сортировка."""

import enum
from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from inventory_manager.db.models import ProductBase, ProductRead
from inventory_manager.presentation.margin import format_margin_rate, margin_amount

P = TypeVar("P", bound=ProductBase)

# Ниже этого количества товар помечается как заканчивающийся
LOW_STOCK_THRESHOLD = 10


class ViewMode(enum.StrEnum):
    GRID = "grid"
    LIST = "list"
    TABLE = "table"


class SortField(enum.StrEnum):
    NAME = "name"
    QUANTITY = "quantity"
    PURCHASE_PRICE = "purchase_price"
    SALE_PRICE = "sale_price"
    MARGIN_RATE = "margin_rate"


class SortDirection(enum.StrEnum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class StockStatus(enum.StrEnum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    NORMAL = "normal"

    @property
    def label(self) -> str:
        return _STOCK_LABELS[self]


_STOCK_LABELS = {
    StockStatus.OUT_OF_STOCK: "품절",
    StockStatus.LOW_STOCK: "재고 부족",
    StockStatus.NORMAL: "정상",
}


def classify_stock(quantity: int) -> StockStatus:
    """Бейдж остатка: 0 - нет в наличии, до 10 - мало, иначе норма."""
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity < LOW_STOCK_THRESHOLD:
        return StockStatus.LOW_STOCK
    return StockStatus.NORMAL


class CatalogViewState(BaseModel):
    """
    Неизменяемое состояние списка.

    Каждое действие пользователя порождает новое состояние, а сам список
    заново вычисляется функцией build_catalog_view.
    """

    model_config = ConfigDict(frozen=True)

    search: str = ""
    supplier: str | None = None
    supplier_query: str = ""
    sort_field: SortField | None = None
    sort_direction: SortDirection = SortDirection.ASC
    view_mode: ViewMode = ViewMode.GRID

    def with_search(self, search: str) -> "CatalogViewState":
        return self.model_copy(update={"search": search})

    def with_supplier(self, supplier: str | None) -> "CatalogViewState":
        return self.model_copy(update={"supplier": supplier or None})

    def with_supplier_query(self, query: str) -> "CatalogViewState":
        return self.model_copy(update={"supplier_query": query})

    def with_view_mode(self, view_mode: ViewMode) -> "CatalogViewState":
        return self.model_copy(update={"view_mode": view_mode})

    def toggle_sort(self, field: SortField) -> "CatalogViewState":
        """Повторный выбор поля меняет направление, новое поле - по возрастанию."""
        if field == self.sort_field:
            direction = self.sort_direction.flipped()
        else:
            direction = SortDirection.ASC
        return self.model_copy(
            update={"sort_field": field, "sort_direction": direction}
        )


def filter_products(
    products: Sequence[P], search: str = "", supplier: str | None = None
) -> list[P]:
    """
    Оставляет товары, чье имя содержит строку поиска (без учета регистра)
    и, если выбран поставщик, чей поставщик совпадает с ним.
    """
    needle = search.casefold()
    return [
        product
        for product in products
        if needle in product.name.casefold()
        and (not supplier or product.supplier == supplier)
    ]


def sort_products(
    products: Sequence[P],
    field: SortField,
    direction: SortDirection = SortDirection.ASC,
) -> list[P]:
    """
    Сортирует товары по полю.

    Имя сравнивается как текст без учета регистра, остальные поля как числа.
    Порядок по убыванию - точный разворот порядка по возрастанию.
    """
    if field is SortField.NAME:
        ordered = sorted(products, key=lambda p: (p.name.casefold(), p.name))
    else:
        ordered = sorted(products, key=lambda p: getattr(p, field.value))
    if direction is SortDirection.DESC:
        ordered.reverse()
    return ordered


def supplier_suggestions(products: Sequence[ProductBase], query: str = "") -> list[str]:
    """
    Уникальные поставщики по всему (нефильтрованному) списку, по алфавиту.

    Args:
        products: Все загруженные товары.
        query: Дополнительный фильтр подсказок, без учета регистра.
    """
    names = {product.supplier for product in products if product.supplier}
    needle = query.casefold()
    return sorted(name for name in names if needle in name.casefold())


class CatalogItem(BaseModel):
    product: ProductRead
    margin_amount: float
    margin_rate_display: str
    stock_status: StockStatus
    stock_label: str


class CatalogView(BaseModel):
    state: CatalogViewState
    items: list[CatalogItem]
    suppliers: list[str]
    total: int
    shown: int


def build_catalog_view(
    products: Sequence[ProductRead], state: CatalogViewState
) -> CatalogView:
    """
    Вычисляет отображаемый список из товаров и состояния.

    Сортировка применяется только в табличном режиме.
    """
    visible = filter_products(products, state.search, state.supplier)
    if state.view_mode is ViewMode.TABLE and state.sort_field is not None:
        visible = sort_products(visible, state.sort_field, state.sort_direction)

    items = []
    for product in visible:
        status = classify_stock(product.quantity)
        items.append(
            CatalogItem(
                product=product,
                margin_amount=margin_amount(product.purchase_price, product.sale_price),
                margin_rate_display=format_margin_rate(product.margin_rate),
                stock_status=status,
                stock_label=status.label,
            )
        )

    return CatalogView(
        state=state,
        items=items,
        suppliers=supplier_suggestions(products, state.supplier_query),
        total=len(products),
        shown=len(items),
    )
