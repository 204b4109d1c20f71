# landing/schemas/user.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


# длины колонок таблицы users
USERNAME_MAX = 100
NAME_MAX = 255
EMAIL_MAX = 255
ROLE_MAX = 50


def _check_email(value: str) -> str:
    value = value.strip()
    if "@" not in value:
        raise ValueError("Email inválido")
    if len(value) > EMAIL_MAX:
        raise ValueError(f"Email deve ter no máximo {EMAIL_MAX} caracteres")
    return value


class UserCreate(BaseModel):
    """
    Создание пользователя администратором.
    Пароль приходит открытым текстом и хэшируется в сервисе.
    """
    username: str = Field(..., min_length=3, max_length=USERNAME_MAX, description="Mínimo 3 caracteres")
    password: str = Field(..., min_length=6, description="Mínimo 6 caracteres")
    name: str = Field(..., min_length=1, max_length=NAME_MAX)
    email: str
    role: str = Field("admin", min_length=1, max_length=ROLE_MAX)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)


class UserUpdate(BaseModel):
    """
    Частичное обновление пользователя.
    Передаются только те поля, которые нужно изменить: отсутствующее поле не трогается.
    """
    username: Optional[str] = Field(None, min_length=3, max_length=USERNAME_MAX)
    password: Optional[str] = Field(None, min_length=6)
    name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX)
    email: Optional[str] = None
    role: Optional[str] = Field(None, min_length=1, max_length=ROLE_MAX)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _check_email(value)

    def changes(self) -> dict:
        """Переданные поля без None: null не затирает значение в базе."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class UserPublic(BaseModel):
    """Пользователь в ответах API, без хэша пароля."""
    id: int
    username: str
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
