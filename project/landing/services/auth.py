# landing/services/auth.py

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from landing.models.session import UserSession
from landing.models.user import User as UserModel
from landing.schemas.auth import SessionContext
from landing.schemas.user import UserPublic
from landing.services.user import find_user_by_username
from landing.utils.errors import InvalidCredentials, Unauthenticated, ValidationError, SessionError
from landing.utils.log import Log
from landing.utils.security import (
    verify_password,
    new_session_token,
    sign_session_cookie,
    read_session_cookie,
    session_expiry,
)


def as_utc(value: datetime) -> datetime:
    # SQLite возвращает datetime без tzinfo
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


async def login(username: str, password: str, db: AsyncSession, log: Log) -> tuple[UserPublic, str, datetime]:
    """
    Проверяет логин и пароль и открывает серверную сессию.

    Возвращает пользователя без хэша пароля, значение cookie и срок его жизни.
    Неизвестный логин и неверный пароль дают одну и ту же ошибку InvalidCredentials.
    """
    if not username or not password:
        raise ValidationError("Usuário e senha são obrigatórios")

    user = await find_user_by_username(username, db)
    if not verify_password(password, user.password_hash if user else None):
        await log.log_warning("auth", "Неудачная попытка входа", {"username": username})
        raise InvalidCredentials()

    now = datetime.now(timezone.utc)
    expires_at = session_expiry(now)
    token = new_session_token()
    db.add(UserSession(id=token, user_id=user.id, created_at=now, expires_at=expires_at))
    await db.commit()

    await log.log_info("auth", "Пользователь вошёл", {"user_id": user.id, "username": user.username})
    return UserPublic.model_validate(user), sign_session_cookie(token, expires_at), expires_at


async def logout(cookie: Optional[str], db: AsyncSession, log: Log) -> None:
    """
    Удаляет серверную сессию. Повторный вызов или вызов без сессии — не ошибка.
    SessionError только при сбое хранилища.
    """
    token = read_session_cookie(cookie)
    if token is None:
        return
    try:
        await db.execute(delete(UserSession).where(UserSession.id == token))
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        await log.log_error("auth", f"Ошибка удаления сессии: {e}")
        raise SessionError()
    await log.log_info("auth", "Сессия завершена")


async def current_user(cookie: Optional[str], db: AsyncSession, log: Log) -> SessionContext:
    """
    Пользователь активной сессии.
    Unauthenticated, если cookie нет, подпись неверна, сессия удалена или истекла,
    либо пользователь сессии больше не существует.
    """
    token = read_session_cookie(cookie)
    if token is None:
        raise Unauthenticated()

    session = await db.get(UserSession, token)
    if session is None:
        raise Unauthenticated()

    if as_utc(session.expires_at) <= datetime.now(timezone.utc):
        await db.delete(session)
        await db.commit()
        await log.log_info("auth", "Сессия истекла", {"user_id": session.user_id})
        raise Unauthenticated()

    user = await db.get(UserModel, session.user_id)
    if user is None:
        await log.log_warning("auth", "Пользователь сессии не найден", {"user_id": session.user_id})
        raise Unauthenticated("Usuário não encontrado")

    return SessionContext(token=token, user=UserPublic.model_validate(user))
