"""Загрузка фотографий товаров в Cloudinary (подписанная загрузка)."""

import base64
import hashlib
import io
import logging
import time

import httpx
from PIL import Image, ImageOps, UnidentifiedImageError
from pydantic import BaseModel

from inventory_manager.core.config import Settings, settings
from inventory_manager.core.exceptions import ImageValidationError, UpstreamError

# Длинная сторона после сжатия, пикселей
MAX_IMAGE_SIZE = 800
# Качество JPEG (0.7 по шкале 0..1)
JPEG_QUALITY = 70

UPLOAD_FAILED_MESSAGE = "이미지 업로드에 실패했습니다."
INVALID_IMAGE_MESSAGE = "이미지 파일을 읽을 수 없습니다."


class UploadResult(BaseModel):
    """Ответ хостинга: публичный URL и идентификатор файла."""

    url: str
    public_id: str


def prepare_image(data: bytes) -> bytes:
    """
    Уменьшает изображение и перекодирует его в JPEG.

    Сначала снимок поворачивается по EXIF, затем длинная сторона
    ограничивается MAX_IMAGE_SIZE с сохранением пропорций; маленькие
    изображения не увеличиваются. Функция синхронная и тяжелая, из
    асинхронного кода ее вызывают через asyncio.to_thread.

    Args:
        data: Исходные байты файла.

    Returns:
        Байты JPEG.

    Raises:
        ImageValidationError: Если файл не удалось прочитать как изображение.
    """
    try:
        with Image.open(io.BytesIO(data)) as source:
            # Поворот по EXIF Orientation, иначе фото с телефона ляжет боком
            image = ImageOps.exif_transpose(source).convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        raise ImageValidationError(INVALID_IMAGE_MESSAGE) from e

    image.thumbnail((MAX_IMAGE_SIZE, MAX_IMAGE_SIZE))

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    return buffer.getvalue()


def sign_upload(timestamp: int, secret: str) -> str:
    """SHA-256 от строки параметров с приклеенным секретом."""
    return hashlib.sha256(f"timestamp={timestamp}{secret}".encode()).hexdigest()


async def upload_image(
    data: bytes,
    *,
    config: Settings = settings,
    transport: httpx.AsyncBaseTransport | None = None,
    timestamp: int | None = None,
) -> UploadResult:
    """
    Отправляет готовое изображение в Cloudinary.

    Повторных попыток нет: любая ошибка сразу превращается в UpstreamError.

    Args:
        data: Байты JPEG (результат prepare_image).
        config: Настройки с ключами Cloudinary.
        transport: Транспорт httpx (подменяется в тестах).
        timestamp: Unix-время подписи в секундах; по умолчанию текущее.

    Returns:
        URL и public_id загруженного файла.

    Raises:
        UpstreamError: Нет ключей, сеть недоступна или хостинг вернул не 2xx.
    """
    if not config.cloudinary_configured:
        logging.error("Cloudinary credentials are not configured")
        raise UpstreamError(UPLOAD_FAILED_MESSAGE)

    if timestamp is None:
        timestamp = int(time.time())
    secret = config.CLOUDINARY_API_SECRET or ""
    payload = {
        "file": "data:image/jpeg;base64," + base64.b64encode(data).decode("ascii"),
        "timestamp": str(timestamp),
        "api_key": config.CLOUDINARY_API_KEY or "",
        "signature": sign_upload(timestamp, secret),
    }
    url = f"{config.CLOUDINARY_API_BASE}/{config.CLOUDINARY_CLOUD_NAME}/image/upload"

    async with httpx.AsyncClient(transport=transport, timeout=30.0) as client:
        try:
            response = await client.post(url, data=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logging.error("Cloudinary upload rejected: %s", e.response.text)
            raise UpstreamError(UPLOAD_FAILED_MESSAGE) from e
        except httpx.RequestError as e:
            logging.error("Cloudinary upload error: %s", e)
            raise UpstreamError(UPLOAD_FAILED_MESSAGE) from e

    try:
        body = response.json()
        return UploadResult(url=body["secure_url"], public_id=body["public_id"])
    except (ValueError, KeyError) as e:
        logging.error("Unexpected Cloudinary response: %s", response.text)
        raise UpstreamError(UPLOAD_FAILED_MESSAGE) from e
