# landing/schemas/auth.py

from pydantic import BaseModel
from landing.schemas.user import UserPublic


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class SessionContext(BaseModel):
    """Явный контекст авторизованного запроса: передаётся в защищённые операции."""
    token: str
    user: UserPublic
