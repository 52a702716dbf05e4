"""REST-обработчик загрузки фотографий товаров."""

import asyncio
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, File, UploadFile

from inventory_manager.core.config import Settings, get_settings
from inventory_manager.core.exceptions import ImageValidationError
from inventory_manager.services import image_upload

router = APIRouter(tags=["upload"])


def get_upload_transport() -> httpx.AsyncBaseTransport | None:
    """Транспорт httpx для Cloudinary; None - обычная сеть."""
    return None


@router.post("/upload")
async def handle_upload(
    config: Annotated[Settings, Depends(get_settings)],
    transport: Annotated[
        httpx.AsyncBaseTransport | None, Depends(get_upload_transport)
    ],
    file: Annotated[UploadFile | None, File()] = None,
) -> dict[str, str]:
    """
    Сжимает изображение (до 800px, JPEG 0.7) и загружает его в Cloudinary.

    Returns:
        Публичный URL и publicId файла.
    """
    if file is None:
        raise ImageValidationError("파일이 없습니다.")

    try:
        data = await file.read()
    finally:
        await file.close()
    if not data:
        raise ImageValidationError("파일이 없습니다.")

    # Pillow работает синхронно, выносим в поток, чтобы не блокировать цикл
    prepared = await asyncio.to_thread(image_upload.prepare_image, data)
    result = await image_upload.upload_image(
        prepared, config=config, transport=transport
    )
    return {"url": result.url, "publicId": result.public_id}
