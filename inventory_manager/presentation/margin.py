"""Расчет маржи и форматирование цен для отображения."""

from decimal import ROUND_HALF_UP, Decimal

# Верхняя граница маржи: столбец NUMERIC(5, 2)
MAX_MARGIN_RATE = 999.99

_CENT = Decimal("0.01")


def round_half_up(value: float) -> float:
    """
    Округляет до 2 знаков, половину от нуля.

    Берется точное двоичное значение float, поэтому 3.125 дает 3.13,
    а -3.125 дает -3.13.
    """
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def compute_margin_rate(purchase: float, sale: float, current: float) -> float:
    """
    Считает маржу в процентах от закупочной цены.

    Пересчет выполняется только при положительных обеих ценах, иначе
    остается текущее значение (в ноль не сбрасывается).

    Args:
        purchase: Закупочная цена.
        sale: Цена продажи.
        current: Текущее значение маржи.

    Returns:
        Маржа, ограниченная MAX_MARGIN_RATE и округленная до 2 знаков
        (половина округляется от нуля).
    """
    if purchase > 0 and sale > 0:
        margin = (sale - purchase) / purchase * 100
        return round_half_up(min(margin, MAX_MARGIN_RATE))
    return current


def margin_amount(purchase: float, sale: float) -> float:
    """Маржа в деньгах: цена продажи минус закупочная."""
    return sale - purchase


def format_margin_rate(rate: float) -> str:
    return f"{round_half_up(rate):.2f}"


def format_price(value: float) -> str:
    """Цена в вонах, как в ko-KR: без дробной части, с разделителями тысяч."""
    sign = "-" if value < 0 else ""
    return f"{sign}₩{abs(value):,.0f}"
