"""Модели базы данных проекта."""

import datetime

from sqlalchemy import DateTime, Numeric
from sqlmodel import Field, SQLModel


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class ProductBase(SQLModel):
    """Поля товара, которые передает клиент при создании и полной замене."""

    name: str = Field(index=True, min_length=1, max_length=255)
    image_url: str | None = Field(default=None)
    purchase_price: float = Field(
        ge=0, sa_type=Numeric(12, 2, asdecimal=False)  # type: ignore[call-overload]
    )
    sale_price: float = Field(
        ge=0, sa_type=Numeric(12, 2, asdecimal=False)  # type: ignore[call-overload]
    )
    # Хранится как прислал клиент, сервер не пересчитывает
    margin_rate: float = Field(
        default=0,
        ge=-999.99,
        le=999.99,
        sa_type=Numeric(5, 2, asdecimal=False),  # type: ignore[call-overload]
    )
    quantity: int = Field(default=0, ge=0)
    link: str | None = Field(default=None)
    supplier: str | None = Field(default=None, index=True, max_length=255)
    purchase_date: datetime.date | None = Field(default=None)


class Product(ProductBase, table=True):
    """Модель товара на складе."""

    __tablename__ = "products"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime.datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
    )
    updated_at: datetime.datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
    )


class ProductCreate(ProductBase):
    """Тело запросов POST и PUT. Количество может прийти как null."""

    quantity: int | None = Field(default=0, ge=0)  # type: ignore[assignment]


class ProductRead(ProductBase):
    """Полное представление товара в ответах API."""

    id: int
    created_at: datetime.datetime
    updated_at: datetime.datetime


class Supplier(SQLModel, table=True):
    """Поставщик. Создается неявно при сохранении товара, не удаляется."""

    __tablename__ = "suppliers"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=255)
    created_at: datetime.datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
    )


class SupplierRead(SQLModel):
    name: str
