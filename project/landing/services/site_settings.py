# landing/services/site_settings.py

"""
Настройки сайта: одна строка с id=1.

Каждая функция set_* меняет только свои поля одним UPDATE ... WHERE id=1,
поэтому параллельные обновления разных полей не затирают друг друга.
Для одного и того же поля побеждает последняя запись.
"""

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from landing.models.site_settings import SiteSettings, SETTINGS_DEFAULTS, SETTINGS_ID
from landing.schemas.site_settings import (
    SiteSettingsResponse,
    PublicSettings,
    LandingTextsUpdate,
    ScriptsUpdate,
    SITE_TITLE_MAX,
)
from landing.utils.errors import ValidationError
from landing.utils.log import Log


async def _settings_row(db: AsyncSession) -> SiteSettings:
    """Строка настроек; если её нет, создаётся со значениями по умолчанию."""
    row = await db.get(SiteSettings, SETTINGS_ID, populate_existing=True)
    if row is None:
        row = SiteSettings(id=SETTINGS_ID, **SETTINGS_DEFAULTS)
        db.add(row)
        try:
            await db.commit()
        except IntegrityError:
            # строку успел создать параллельный запрос
            await db.rollback()
            return await db.get(SiteSettings, SETTINGS_ID, populate_existing=True)
        await db.refresh(row)
    return row


async def _update_fields(db: AsyncSession, log: Log, fields: dict) -> None:
    if not fields:
        return
    await _settings_row(db)
    await db.execute(
        update(SiteSettings)
        .where(SiteSettings.id == SETTINGS_ID)
        .values(**fields, updated_at=func.now())
    )
    await db.commit()
    await log.log_info("settings", "Настройки обновлены", {"fields": sorted(fields)})


# ────────────── Чтение ──────────────
async def get_settings(db: AsyncSession) -> SiteSettingsResponse:
    """Текущие настройки; пустые текстовые поля заменяются значениями по умолчанию."""
    row = await _settings_row(db)
    data = {column.name: getattr(row, column.name) for column in SiteSettings.__table__.columns}
    for key, default in SETTINGS_DEFAULTS.items():
        if data.get(key) is None:
            data[key] = default
    return SiteSettingsResponse(**data)


async def get_public_settings(db: AsyncSession) -> PublicSettings:
    current = await get_settings(db)
    return PublicSettings(**current.model_dump(include=set(PublicSettings.model_fields)))


# ────────────── Обновления ──────────────
async def set_logo_path(path: str, db: AsyncSession, log: Log) -> None:
    await _update_fields(db, log, {"logo_path": path})


async def set_favicon_path(path: str, db: AsyncSession, log: Log) -> None:
    await _update_fields(db, log, {"favicon_path": path})


async def set_ebook_path(path: str, db: AsyncSession, log: Log) -> None:
    await _update_fields(db, log, {"ebook_path": path})


async def set_site_title(title: str, db: AsyncSession, log: Log) -> None:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Título do site é obrigatório")
    if len(title) > SITE_TITLE_MAX:
        raise ValidationError(f"Título do site deve ter no máximo {SITE_TITLE_MAX} caracteres")
    await _update_fields(db, log, {"site_title": title})


async def set_landing_texts(texts: LandingTextsUpdate, db: AsyncSession, log: Log) -> None:
    """
    Тексты лендинга. Меняются только переданные поля.
    Заголовок и подзаголовок, если переданы, не могут быть пустыми.
    """
    fields = texts.model_dump(exclude_unset=True)
    for required, message in (
        ("hero_title", "Título principal é obrigatório"),
        ("hero_subtitle", "Subtítulo é obrigatório"),
    ):
        if required in fields and not (fields[required] or "").strip():
            raise ValidationError(message, errors=[{"field": required, "message": message}])
    await _update_fields(db, log, fields)


async def set_scripts(scripts: ScriptsUpdate, db: AsyncSession, log: Log) -> None:
    """ID сторонних скриптов. Пустая строка или null очищает поле."""
    fields = {
        key: (value.strip() or None) if isinstance(value, str) else None
        for key, value in scripts.model_dump(exclude_unset=True).items()
    }
    await _update_fields(db, log, fields)
