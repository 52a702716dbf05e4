"""Настройки конфигурации приложения."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Загружает настройки из файла .env.

    Атрибуты:
        model_config: Конфигурация для Pydantic моделей.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # База данных
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "inventory"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    # Полная строка подключения, если задана, имеет приоритет над POSTGRES_*
    DATABASE_URL: str | None = None

    # Cloudinary (хостинг изображений). Без ключей загрузка недоступна.
    CLOUDINARY_CLOUD_NAME: str | None = None
    CLOUDINARY_API_KEY: str | None = None
    CLOUDINARY_API_SECRET: str | None = None
    CLOUDINARY_API_BASE: str = "https://api.cloudinary.com/v1_1"

    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        """
        Собирает строку подключения к PostgreSQL.

        Returns:
            Строка подключения для SQLAlchemy.
        """
        if self.DATABASE_URL:
            # Хостинги отдают postgres://, асинхронному движку нужен драйвер
            if self.DATABASE_URL.startswith("postgres://"):
                return self.DATABASE_URL.replace(
                    "postgres://", "postgresql+asyncpg://", 1
                )
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def cloudinary_configured(self) -> bool:
        """Заданы ли все ключи Cloudinary."""
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )


settings = Settings()


def get_settings() -> Settings:
    """Зависимость FastAPI; в тестах подменяется через dependency_overrides."""
    return settings
