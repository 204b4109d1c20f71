# landing/schemas/lead.py

import re
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

# только ASCII 0-9: \D в Python считает цифрами и другие письменности
NON_DIGITS = re.compile(r"[^0-9]")

# длины колонок таблицы leads
NAME_MAX = 255
EMAIL_MAX = 255
WHATSAPP_MAX = 50


def whatsapp_digits(value: str) -> str:
    """Оставляет только цифры: "(11) 99999-9999" -> "11999999999"."""
    return NON_DIGITS.sub("", value or "")


# ────────────── Схема для CREATE ──────────────
class LeadCreate(BaseModel):
    name: str = Field(..., max_length=NAME_MAX, description="Nome do visitante, mínimo 2 caracteres")
    email: EmailStr
    whatsapp: str = Field(..., max_length=WHATSAPP_MAX, description="DDD + número, 10 ou 11 dígitos")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Nome deve ter pelo menos 2 caracteres")
        return value

    @field_validator("email")
    @classmethod
    def check_email_length(cls, value: str) -> str:
        if len(value) > EMAIL_MAX:
            raise ValueError(f"Email deve ter no máximo {EMAIL_MAX} caracteres")
        return value

    @field_validator("whatsapp")
    @classmethod
    def check_whatsapp(cls, value: str) -> str:
        if len(whatsapp_digits(value)) not in (10, 11):
            raise ValueError("WhatsApp deve ter 10 ou 11 dígitos (DDD + número)")
        return value.strip()


# ────────────── Схема для RESPONSE ──────────────
class Lead(BaseModel):
    id: str
    name: str
    email: str
    whatsapp: str
    createdAt: datetime = Field(validation_alias="created_at")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }
