# landing/routes/lead.py

from fastapi import APIRouter, Depends, Request, status

from landing.config import settings
from landing.routes.auth import require_auth
from landing.schemas.auth import SessionContext
from landing.schemas.lead import Lead, LeadCreate
from landing.services.lead import create_lead_service, read_leads_service, read_lead_service

router = APIRouter()


async def leads_access(request: Request):
    """Список лидов закрыт авторизацией, если не включён LEADS_PUBLIC."""
    if settings.LEADS_PUBLIC:
        return None
    return await require_auth(request)


# ────────────── CREATE ──────────────
@router.post(
    "",
    status_code=status.HTTP_200_OK,
    summary="Cadastro de lead (formulário da landing page)",
    response_description="ID do lead criado",
    responses={
        200: {"description": "Лид сохранён", "content": {"application/json": {"example": {"success": True, "leadId": "6f1c..."}}}},
        400: {"description": "Неверные данные формы (имя, email или WhatsApp)"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def create_lead(lead: LeadCreate, request: Request):
    db_lead = await create_lead_service(lead, request.state.db, request.app.state.log)
    return {"success": True, "message": "Lead cadastrado com sucesso", "leadId": db_lead.id}


# ────────────── READ ALL ──────────────
@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="Список лидов",
    response_description="Все лиды, новые первыми",
    responses={
        200: {"description": "Список лидов"},
        401: {"description": "Нет сессии"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def read_leads(request: Request, _=Depends(leads_access)):
    leads = await read_leads_service(request.state.db, request.app.state.log)
    items = [Lead.model_validate(lead).model_dump() for lead in leads]
    return {"success": True, "leads": items, "total": len(items)}


# ────────────── READ ONE ──────────────
@router.get(
    "/{id}",
    status_code=status.HTTP_200_OK,
    summary="Лид по ID",
    responses={
        200: {"description": "Лид найден"},
        401: {"description": "Нет сессии"},
        404: {"description": "Лид не найден"},
    },
)
async def read_lead(id: str, request: Request, _: SessionContext = Depends(require_auth)):
    lead = await read_lead_service(id, request.state.db, request.app.state.log)
    return {"success": True, "lead": Lead.model_validate(lead).model_dump()}
