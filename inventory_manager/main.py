"""Главный файл приложения. Точка входа."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inventory_manager.core.config import settings
from inventory_manager.core.exceptions import InventoryError, ProductValidationError
from inventory_manager.db.session import async_engine
from inventory_manager.handlers import catalog, products, suppliers, upload

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

REQUIRED_FIELDS_MESSAGE = "필수 항목을 입력해주세요."


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Контекстный менеджер для управления жизненным циклом приложения.
    """
    logging.info("Inventory API starting")
    yield
    # Закрываем пул соединений
    await async_engine.dispose()
    logging.info("Inventory API stopped")


# --- Приложение FastAPI ---
app = FastAPI(title="Inventory Manager API", lifespan=lifespan)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    """Любая доменная ошибка превращается в {"error": ...} с ее кодом."""
    if exc.status_code >= 500:
        logging.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(content={"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Ошибки валидации тела запроса отдаются как 400, а не 422.
    """
    errors = exc.errors()
    field = str(errors[0]["loc"][-1]) if errors and errors[0].get("loc") else None
    logging.info(
        "Validation failed on %s %s: field=%s", request.method, request.url.path, field
    )
    message = REQUIRED_FIELDS_MESSAGE
    if field is not None:
        message = f"{message} ({field})"
    error = ProductValidationError(message, field=field)
    return await inventory_error_handler(request, error)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logging.exception("!!! Unhandled error in %s %s !!!", request.method, request.url.path)
    return JSONResponse(content={"error": "서버 오류가 발생했습니다."}, status_code=500)


app.include_router(products.router, prefix="/api")
app.include_router(suppliers.router, prefix="/api")
app.include_router(upload.router, prefix="/api")
app.include_router(catalog.router, prefix="/api")


@app.get("/")
async def read_root() -> dict[str, str]:
    return {"message": "재고관리 시스템 API"}


# --- Точка входа для локального запуска ---
if __name__ == "__main__":
    uvicorn.run(
        "inventory_manager.main:app",
        host="0.0.0.0",  # noqa: B104
        port=8000,
        reload=True,
    )
