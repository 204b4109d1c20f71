# landing/utils/errors.py

"""
Ошибки приложения.

Каждая ошибка — это HTTPException с фиксированным статусом и сообщением
по умолчанию, поэтому сервисы поднимают их так же, как HTTPException,
а обработчик в main превращает их в {"success": false, "message": ...}.
"""

from typing import Any, Optional
from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Erro interno do servidor"

    def __init__(self, message: Optional[str] = None, errors: Optional[list[Any]] = None, headers: Optional[dict] = None):
        super().__init__(status_code=self.status_code, detail=message or self.message, headers=headers)
        self.errors = errors


# ────────────── 400 ──────────────
class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Dados inválidos"


class Conflict(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Nome de usuário já está em uso"


class InvalidFileType(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Tipo de arquivo não permitido"


class FileTooLarge(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Arquivo excede o tamanho máximo permitido"


# ────────────── 401 ──────────────
class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Usuário ou senha inválidos"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Não autenticado"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Acesso não autorizado"


# ────────────── 404 ──────────────
class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Recurso não encontrado"


# ────────────── 500 ──────────────
class SessionError(AppError):
    message = "Erro ao encerrar a sessão"


class InternalError(AppError):
    message = "Erro interno do servidor"
