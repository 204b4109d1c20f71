# landing/services/user.py

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from landing.models.user import User as UserModel
from landing.schemas.user import UserCreate, UserUpdate
from landing.utils.errors import Conflict, NotFound
from landing.utils.log import Log
from landing.utils.security import hash_password


async def find_user_by_username(username: str, db: AsyncSession) -> Optional[UserModel]:
    result = await db.execute(select(UserModel).where(UserModel.username == username))
    return result.scalar_one_or_none()


async def _commit_unique(db: AsyncSession, log: Log, username: str):
    """Коммит; нарушение уникальности логина (гонка двух запросов) превращается в Conflict."""
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        await log.log_warning("user", "Логин уже занят", {"username": username})
        raise Conflict()


async def read_users_service(db: AsyncSession, log: Log) -> list[UserModel]:
    """Список пользователей, новые первыми."""
    result = await db.execute(select(UserModel).order_by(UserModel.created_at.desc(), UserModel.id.desc()))
    users = result.scalars().all()

    await log.log_info("user", f"{len(users)} пользователей загружено")
    return list(users)


async def read_user_service(id: int, db: AsyncSession, log: Log) -> UserModel:
    db_user = await db.get(UserModel, id)
    if db_user is None:
        await log.log_warning("user", "Пользователь не найден", {"id": id})
        raise NotFound("Usuário não encontrado")
    return db_user


async def create_user_service(user: UserCreate, db: AsyncSession, log: Log) -> UserModel:
    """
    Создание пользователя.
    Уникальность логина проверяется до вставки, пароль хранится только в виде хэша.
    """
    if await find_user_by_username(user.username, db) is not None:
        await log.log_warning("user", "Логин уже занят", {"username": user.username})
        raise Conflict()

    db_user = UserModel(
        username=user.username,
        password_hash=hash_password(user.password),
        name=user.name,
        email=user.email,
        role=user.role,
    )
    db.add(db_user)
    await _commit_unique(db, log, user.username)
    await db.refresh(db_user)

    await log.log_info("user", "Пользователь создан", {"id": db_user.id, "username": db_user.username})
    return db_user


async def update_user_service(id: int, user_update: UserUpdate, db: AsyncSession, log: Log) -> UserModel:
    """
    Частичное обновление пользователя: меняются только переданные поля.
    Новый пароль хэшируется заново.
    """
    db_user = await read_user_service(id, db, log)
    changes = user_update.changes()

    username = changes.get("username")
    if username is not None and username != db_user.username:
        existing = await find_user_by_username(username, db)
        if existing is not None and existing.id != id:
            await log.log_warning("user", "Логин уже занят", {"username": username})
            raise Conflict()

    password = changes.pop("password", None)
    if password is not None:
        db_user.password_hash = hash_password(password)

    for key, value in changes.items():
        setattr(db_user, key, value)

    await _commit_unique(db, log, db_user.username)
    await db.refresh(db_user)

    await log.log_info("user", "Пользователь обновлён", {"id": id, "fields": sorted(user_update.changes())})
    return db_user
