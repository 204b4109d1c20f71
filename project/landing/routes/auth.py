# landing/routes/auth.py

from fastapi import APIRouter, Request, Response, status

from landing.config import settings
from landing.schemas.auth import LoginRequest, SessionContext
from landing.services import auth as auth_service
from landing.utils.errors import Unauthenticated, Unauthorized

router = APIRouter()


async def require_auth(request: Request) -> SessionContext:
    """
    Зависимость для защищённых маршрутов.
    Выполняется до обработчика: без действующей сессии — 401 Unauthorized.
    """
    try:
        return await auth_service.current_user(
            request.cookies.get(settings.SESSION_COOKIE_NAME),
            request.state.db,
            request.app.state.log,
        )
    except Unauthenticated:
        await request.app.state.log.log_warning("auth", "Доступ без сессии", {"path": request.url.path})
        raise Unauthorized()


# ────────────── LOGIN ──────────────
@router.post(
    "/login",
    summary="Вход администратора",
    responses={
        200: {
            "description": "Сессия открыта, cookie установлена",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Login realizado com sucesso",
                        "user": {"id": 1, "username": "admin", "name": "Administrador", "email": "admin@corteiia.com", "role": "admin"},
                    }
                }
            },
        },
        400: {"description": "Не передан логин или пароль"},
        401: {"description": "Неверный логин или пароль"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def login(body: LoginRequest, request: Request, response: Response):
    """
    Проверяет логин и пароль, открывает серверную сессию
    и ставит HttpOnly cookie с её подписанным идентификатором.
    """
    user, cookie, expires_at = await auth_service.login(
        body.username, body.password, request.state.db, request.app.state.log
    )
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=cookie,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        expires=expires_at,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
        path="/",
    )
    return {"success": True, "message": "Login realizado com sucesso", "user": user.model_dump()}


# ────────────── LOGOUT ──────────────
@router.post(
    "/logout",
    summary="Выход",
    responses={
        200: {"description": "Сессия удалена (или её не было)"},
        500: {"description": "Ошибка хранилища сессий"},
    },
)
async def logout(request: Request, response: Response):
    await auth_service.logout(
        request.cookies.get(settings.SESSION_COOKIE_NAME), request.state.db, request.app.state.log
    )
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return {"success": True, "message": "Logout realizado com sucesso"}


# ────────────── ME ──────────────
@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Текущий пользователь",
    responses={
        200: {"description": "Сессия активна"},
        401: {"description": "Нет сессии или пользователь удалён"},
    },
)
async def me(request: Request):
    context = await auth_service.current_user(
        request.cookies.get(settings.SESSION_COOKIE_NAME), request.state.db, request.app.state.log
    )
    return {"success": True, "user": context.user.model_dump()}
