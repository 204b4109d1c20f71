# landing/routes/user.py

from fastapi import APIRouter, Depends, Request

from landing.routes.auth import require_auth
from landing.schemas.auth import SessionContext
from landing.schemas.user import UserCreate, UserUpdate, UserPublic
from landing.services.user import (
    create_user_service,
    read_users_service,
    read_user_service,
    update_user_service,
)

router = APIRouter()


# ────────────── READ ALL ──────────────
@router.get(
    "",
    summary="Список пользователей",
    responses={
        200: {"description": "Пользователи без хэшей паролей"},
        401: {"description": "Нет сессии"},
    },
)
async def get_users(request: Request, _: SessionContext = Depends(require_auth)):
    users = await read_users_service(request.state.db, request.app.state.log)
    items = [UserPublic.model_validate(u).model_dump() for u in users]
    return {"success": True, "users": items, "total": len(items)}


# ────────────── CREATE ──────────────
@router.post(
    "",
    summary="Создание пользователя",
    responses={
        200: {"description": "Пользователь создан"},
        400: {"description": "Неверные данные или логин уже занят"},
        401: {"description": "Нет сессии"},
    },
)
async def create_user(user: UserCreate, request: Request, context: SessionContext = Depends(require_auth)):
    """
    ## Создание пользователя

    - Логин не короче 3 символов и должен быть уникальным (иначе `400`).
    - Пароль не короче 6 символов, хранится только хэш.
    """
    log = request.app.state.log
    created = await create_user_service(user, request.state.db, log)
    await log.log_info("user", "Создан администратором", {"by": context.user.id, "id": created.id})
    return {
        "success": True,
        "message": "Usuário criado com sucesso",
        "user": UserPublic.model_validate(created).model_dump(),
    }


# ────────────── READ ONE ──────────────
@router.get(
    "/{user_id}",
    summary="Пользователь по ID",
    responses={
        200: {"description": "Пользователь найден"},
        401: {"description": "Нет сессии"},
        404: {"description": "Пользователь не найден"},
    },
)
async def get_user(user_id: int, request: Request, _: SessionContext = Depends(require_auth)):
    user = await read_user_service(user_id, request.state.db, request.app.state.log)
    return {"success": True, "user": UserPublic.model_validate(user).model_dump()}


# ────────────── UPDATE ──────────────
@router.put(
    "/{user_id}",
    summary="Частичное обновление пользователя",
    responses={
        200: {"description": "Пользователь обновлён"},
        400: {"description": "Неверные данные или логин уже занят"},
        401: {"description": "Нет сессии"},
        404: {"description": "Пользователь не найден"},
    },
)
async def update_user(user_id: int, user_update: UserUpdate, request: Request, _: SessionContext = Depends(require_auth)):
    """
    Меняются только переданные поля. Новый пароль хэшируется заново.
    """
    updated = await update_user_service(user_id, user_update, request.state.db, request.app.state.log)
    return {
        "success": True,
        "message": "Usuário atualizado com sucesso",
        "user": UserPublic.model_validate(updated).model_dump(),
    }
