# landing/utils/security.py

"""
Хэширование паролей и подпись cookie сессии.
Используется passlib с sha256_crypt, чтобы избежать проблем с bcrypt на Windows.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jwt import encode, decode, InvalidTokenError
from passlib.context import CryptContext

from landing.config import settings

# schemes=["sha256_crypt"] - SHA-256 с солью, сравнение за постоянное время
pwd_context = CryptContext(
    schemes=["sha256_crypt"],
    deprecated="auto",
    sha256_crypt__default_rounds=settings.PASSWORD_HASH_ROUNDS,
)

ALGORITHM = "HS256"

# Хэш для проверки, когда пользователь не найден: время ответа не выдаёт существование логина
_DUMMY_HASH = pwd_context.hash(secrets.token_hex(16))


def hash_password(password: str) -> str:
    """
    Хэширует пароль.

    :param password: строка пароля пользователя
    :return: хэшированный пароль в виде строки
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Проверяет совпадение пароля с его хэшем.
    Если хэша нет, всё равно выполняет проверку против фиктивного хэша и возвращает False.
    """
    if not hashed_password:
        pwd_context.verify(plain_password, _DUMMY_HASH)
        return False
    return pwd_context.verify(plain_password, hashed_password)


def new_session_token() -> str:
    """Случайный идентификатор серверной сессии."""
    return secrets.token_urlsafe(32)


def sign_session_cookie(token: str, expires_at: datetime) -> str:
    """Значение cookie: JWT с идентификатором сессии и сроком жизни."""
    return encode({"sid": token, "exp": expires_at}, settings.SESSION_SECRET_KEY, algorithm=ALGORITHM)


def read_session_cookie(value: Optional[str]) -> Optional[str]:
    """
    Возвращает идентификатор сессии из cookie
    или None, если cookie нет, подпись неверна или срок истёк.
    """
    if not value:
        return None
    try:
        payload = decode(value, settings.SESSION_SECRET_KEY, algorithms=[ALGORITHM])
    except InvalidTokenError:
        return None
    return payload.get("sid")


def session_expiry(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
