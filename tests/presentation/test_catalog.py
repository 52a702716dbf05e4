"""Тесты представления списка: фильтр, сортировка, подсказки, бейджи."""

import datetime

import pytest

from inventory_manager.db.models import ProductRead
from inventory_manager.presentation.catalog import (
    CatalogViewState,
    SortDirection,
    SortField,
    StockStatus,
    ViewMode,
    build_catalog_view,
    classify_stock,
    filter_products,
    sort_products,
    supplier_suggestions,
)

NOW = datetime.datetime(2026, 10, 1, 12, 0)


def make_product(
    product_id: int,
    name: str,
    *,
    supplier: str | None = None,
    quantity: int = 0,
    purchase_price: float = 100,
    sale_price: float = 150,
    margin_rate: float = 50,
) -> ProductRead:
    return ProductRead(
        id=product_id,
        name=name,
        purchase_price=purchase_price,
        sale_price=sale_price,
        margin_rate=margin_rate,
        quantity=quantity,
        supplier=supplier,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def products() -> list[ProductRead]:
    return [
        make_product(1, "Blue Widget", supplier="Acme", quantity=0, margin_rate=20),
        make_product(2, "red widget", supplier="Globex", quantity=5, margin_rate=80),
        make_product(3, "Gadget", supplier="Acme", quantity=12, margin_rate=-10),
        make_product(4, "Widget Pro", supplier=None, quantity=10, margin_rate=35),
    ]


def test_search_is_case_insensitive_substring(products: list[ProductRead]) -> None:
    """Поиск по подстроке имени без учета регистра."""
    result = filter_products(products, "WIDGET")

    assert [p.id for p in result] == [1, 2, 4]


def test_search_and_supplier_combine(products: list[ProductRead]) -> None:
    """Поиск и фильтр по поставщику применяются вместе."""
    result = filter_products(products, "widget", "Acme")

    assert [p.id for p in result] == [1]


@pytest.mark.parametrize("supplier", [None, "Acme", "Globex", "Nobody"])
def test_empty_search_equals_supplier_only_filter(
    products: list[ProductRead], supplier: str | None
) -> None:
    """Пустой поиск равносилен фильтру только по поставщику."""
    supplier_only = [p for p in products if supplier is None or p.supplier == supplier]

    assert filter_products(products, "", supplier) == supplier_only


def test_sort_by_name_ignores_case(products: list[ProductRead]) -> None:
    """Сортировка по имени не зависит от регистра."""
    result = sort_products(products, SortField.NAME)

    assert [p.name for p in result] == ["Blue Widget", "Gadget", "red widget", "Widget Pro"]


def test_toggling_name_sort_reverses_order(products: list[ProductRead]) -> None:
    """Повторный выбор поля имени разворачивает порядок."""
    state = CatalogViewState().toggle_sort(SortField.NAME)
    ascending = sort_products(products, state.sort_field, state.sort_direction)  # type: ignore[arg-type]

    toggled = state.toggle_sort(SortField.NAME)
    descending = sort_products(ascending, toggled.sort_field, toggled.sort_direction)  # type: ignore[arg-type]

    assert toggled.sort_direction is SortDirection.DESC
    assert descending == list(reversed(ascending))


@pytest.mark.parametrize(
    ("field", "expected"),
    [
        (SortField.QUANTITY, [1, 2, 4, 3]),
        (SortField.MARGIN_RATE, [3, 1, 4, 2]),
    ],
)
def test_numeric_sort(
    products: list[ProductRead], field: SortField, expected: list[int]
) -> None:
    """Числовые поля сортируются по значению в обе стороны."""
    assert [p.id for p in sort_products(products, field)] == expected
    assert [p.id for p in sort_products(products, field, SortDirection.DESC)] == list(
        reversed(expected)
    )


def test_new_sort_field_resets_to_ascending() -> None:
    """Новое поле сортировки сбрасывает направление на возрастание."""
    state = CatalogViewState().toggle_sort(SortField.NAME).toggle_sort(SortField.NAME)
    assert state.sort_direction is SortDirection.DESC

    state = state.toggle_sort(SortField.SALE_PRICE)

    assert state.sort_field is SortField.SALE_PRICE
    assert state.sort_direction is SortDirection.ASC


def test_state_transitions_do_not_mutate() -> None:
    """Переходы создают новое состояние, исходное не меняется."""
    state = CatalogViewState()

    searched = state.with_search("abc").with_view_mode(ViewMode.TABLE)

    assert state.search == ""
    assert state.view_mode is ViewMode.GRID
    assert searched.search == "abc"
    assert searched.view_mode is ViewMode.TABLE
    with pytest.raises(ValueError):
        state.search = "mutated"  # type: ignore[misc]


def test_supplier_suggestions(products: list[ProductRead]) -> None:
    """Подсказки поставщиков уникальны, по алфавиту и сужаются запросом."""
    assert supplier_suggestions(products) == ["Acme", "Globex"]
    assert supplier_suggestions(products, "glo") == ["Globex"]
    assert supplier_suggestions(products, "zzz") == []


@pytest.mark.parametrize(
    ("quantity", "status"),
    [
        (0, StockStatus.OUT_OF_STOCK),
        (1, StockStatus.LOW_STOCK),
        (5, StockStatus.LOW_STOCK),
        (9, StockStatus.LOW_STOCK),
        (10, StockStatus.NORMAL),
        (250, StockStatus.NORMAL),
    ],
)
def test_classify_stock(quantity: int, status: StockStatus) -> None:
    """Бейдж остатка: 0 - нет, до 10 - мало, иначе норма."""
    assert classify_stock(quantity) is status


def test_sort_applies_only_in_table_view(products: list[ProductRead]) -> None:
    """Сортировка работает только в табличном режиме."""
    state = CatalogViewState(sort_field=SortField.QUANTITY)

    grid = build_catalog_view(products, state)
    table = build_catalog_view(products, state.with_view_mode(ViewMode.TABLE))

    assert [item.product.id for item in grid.items] == [1, 2, 3, 4]
    assert [item.product.id for item in table.items] == [1, 2, 4, 3]


def test_supplier_query_narrows_suggestions_only(products: list[ProductRead]) -> None:
    """Запрос по поставщикам сужает подсказки, но не сам список."""
    state = CatalogViewState().with_supplier_query("glo")

    view = build_catalog_view(products, state)

    assert view.suppliers == ["Globex"]
    assert view.shown == view.total == 4


def test_view_items_carry_derived_fields(products: list[ProductRead]) -> None:
    """Элементы списка содержат маржу в деньгах, процент и бейдж."""
    view = build_catalog_view(
        products, CatalogViewState().with_search("red").with_supplier("Globex")
    )

    assert view.total == 4
    assert view.shown == 1
    item = view.items[0]
    assert item.margin_amount == 50
    assert item.margin_rate_display == "80.00"
    assert item.stock_status is StockStatus.LOW_STOCK
    assert item.stock_label == "재고 부족"
