"""Доменные исключения и их HTTP-коды."""


class InventoryError(Exception):
    """
    Базовая ошибка приложения.

    Атрибуты:
        message: Сообщение для пользователя (на корейском).
        status_code: HTTP-код ответа.
    """

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductValidationError(InventoryError):
    """Не передано обязательное поле или значение вне допустимого диапазона."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ImageValidationError(InventoryError):
    """Загруженный файл отсутствует или не является изображением."""

    status_code = 400


class ProductNotFoundError(InventoryError):
    """Товар с указанным ID не существует."""

    status_code = 404


class UpstreamError(InventoryError):
    """Хостинг изображений недоступен или отклонил запрос."""

    status_code = 500


class StorageError(InventoryError):
    """Любой сбой при работе с базой данных."""

    status_code = 500
