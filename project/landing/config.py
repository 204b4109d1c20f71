# landing/config.py

import os
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class Settings(BaseSettings):
    DATABASE_URL: str                       # async URL, например sqlite+aiosqlite:///./landing.db
    SESSION_SECRET_KEY: str                 # ключ подписи cookie сессии
    SESSION_COOKIE_NAME: str = "sid"
    SESSION_EXPIRE_MINUTES: int = 1440
    SESSION_COOKIE_SECURE: bool = False
    PASSWORD_HASH_ROUNDS: int = 535000     # раунды sha256_crypt, минимум 1000

    UPLOAD_DIR: str = "upload"              # каталог загрузок, раздаётся по /upload
    EBOOK_FALLBACK_PATH: str = os.path.join(PACKAGE_DIR, "assets", "ebook.pdf")
    EBOOK_DOWNLOAD_NAME: str = "7-Dicas-Infaliveis-para-Lotar-sua-Agenda.pdf"

    # Первый администратор (создаётся только если его нет)
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_NAME: str = "Administrador"
    ADMIN_EMAIL: str = "admin@corteiia.com"

    LEADS_PUBLIC: bool = False              # True — список лидов без авторизации
    CORS_ORIGINS: str = "*"

    LOG_DIR: str = "log"
    LOG_PRINT: str = "1"
    LOG_PRINT_DB: str = "0"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
