# landing/services/lead.py

import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from landing.models.lead import Lead as LeadModel
from landing.schemas.lead import LeadCreate
from landing.utils.errors import NotFound
from landing.utils.log import Log


async def create_lead_service(lead: LeadCreate, db: AsyncSession, log: Log) -> LeadModel:
    """
    Сохраняет лид с новым UUID и временем создания.
    Лиды только добавляются: ни обновления, ни удаления нет.
    """
    db_lead = LeadModel(
        id=str(uuid.uuid4()),
        name=lead.name,
        email=str(lead.email),
        whatsapp=lead.whatsapp,
        created_at=datetime.now(timezone.utc),
    )
    db.add(db_lead)
    await db.commit()

    await log.log_info("lead", "Лид создан", {"id": db_lead.id})
    return db_lead


async def read_leads_service(db: AsyncSession, log: Log) -> list[LeadModel]:
    """Все лиды, новые первыми. Без пагинации."""
    result = await db.execute(select(LeadModel).order_by(LeadModel.created_at.desc()))
    leads = result.scalars().all()

    await log.log_info("lead", f"{len(leads)} лидов загружено")
    return list(leads)


async def read_lead_service(id: str, db: AsyncSession, log: Log) -> LeadModel:
    """Чтение лида по ID."""
    db_lead = await db.get(LeadModel, id)
    if db_lead is None:
        await log.log_warning("lead", "Лид не найден", {"id": id})
        raise NotFound("Lead não encontrado")
    return db_lead
