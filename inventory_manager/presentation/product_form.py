"""Состояние формы создания/редактирования товара."""

import datetime
import math

from pydantic import BaseModel

from inventory_manager.db.models import ProductCreate, ProductRead
from inventory_manager.presentation.margin import (
    compute_margin_rate,
    format_margin_rate,
)


def _parse_float(value: str) -> float:
    """Нечисловой, бесконечный или NaN ввод считается нулем."""
    try:
        number = float(value)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _parse_int(value: str) -> int:
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return 0


class ProductForm(BaseModel):
    """
    Поля формы в том виде, как их ввел пользователь (строки).

    Маржа пересчитывается при каждом изменении закупочной цены или цены
    продажи. Если одна из цен не положительная, остается последнее значение.
    """

    name: str = ""
    image_url: str = ""
    purchase_price: str = ""
    sale_price: str = ""
    margin_rate: str = "0"
    quantity: str = "0"
    link: str = ""
    supplier: str = ""
    purchase_date: str = ""
    editing_id: int | None = None

    def set_purchase_price(self, value: str) -> None:
        self.purchase_price = value
        self._recalculate_margin()

    def set_sale_price(self, value: str) -> None:
        self.sale_price = value
        self._recalculate_margin()

    def _recalculate_margin(self) -> None:
        purchase = _parse_float(self.purchase_price)
        sale = _parse_float(self.sale_price)
        if purchase > 0 and sale > 0:
            rate = compute_margin_rate(purchase, sale, _parse_float(self.margin_rate))
            self.margin_rate = format_margin_rate(rate)

    def load(self, product: ProductRead) -> None:
        """Заполняет форму данными товара для редактирования."""
        self.editing_id = product.id
        self.name = product.name
        self.image_url = product.image_url or ""
        self.purchase_price = str(product.purchase_price)
        self.sale_price = str(product.sale_price)
        self.margin_rate = str(product.margin_rate)
        self.quantity = str(product.quantity)
        self.link = product.link or ""
        self.supplier = product.supplier or ""
        self.purchase_date = (
            product.purchase_date.isoformat() if product.purchase_date else ""
        )

    def reset(self) -> None:
        for field_name, field in type(self).model_fields.items():
            setattr(self, field_name, field.default)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def to_payload(self) -> ProductCreate:
        """
        Собирает тело запроса POST/PUT.

        Raises:
            ValueError: Если имя пустое или дата некорректна
                (pydantic.ValidationError - подкласс ValueError).
        """
        purchase_date = (
            datetime.date.fromisoformat(self.purchase_date)
            if self.purchase_date
            else None
        )
        return ProductCreate(
            name=self.name,
            image_url=self.image_url or None,
            purchase_price=_parse_float(self.purchase_price),
            sale_price=_parse_float(self.sale_price),
            margin_rate=_parse_float(self.margin_rate),
            quantity=_parse_int(self.quantity),
            link=self.link or None,
            supplier=self.supplier or None,
            purchase_date=purchase_date,
        )
