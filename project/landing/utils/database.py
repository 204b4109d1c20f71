# landing/utils/database.py

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.future import select
from sqlalchemy.pool import NullPool

from landing.config import settings
from landing.utils.security import hash_password

# ────────────── Base для моделей ──────────────
Base = declarative_base()

# ────────────── URL базы данных ──────────────
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# ────────────── Асинхронный движок ──────────────
engine_options = {"echo": str(settings.LOG_PRINT_DB).lower() in ("1", "true", "yes")}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    # файл SQLite открываем на каждое обращение
    engine_options["poolclass"] = NullPool
else:
    engine_options["pool_pre_ping"] = True

engine = create_async_engine(SQLALCHEMY_DATABASE_URL, **engine_options)

# ────────────── Асинхронная сессия ──────────────
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)


# ────────────── Инициализация базы данных ──────────────
async def init_db(log=None):
    """
    Создаёт все таблицы (если ещё не созданы) и начальные данные:
        • строку настроек сайта с id=1 и значениями по умолчанию
        • первого администратора из ADMIN_USERNAME / ADMIN_PASSWORD,
          если пользователя с таким логином ещё нет
    Существующие записи не изменяются.
    """
    from landing.models.lead import Lead  # noqa: F401
    from landing.models.session import UserSession  # noqa: F401
    from landing.models.site_settings import SiteSettings, SETTINGS_DEFAULTS, SETTINGS_ID
    from landing.models.user import User

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        if await session.get(SiteSettings, SETTINGS_ID) is None:
            session.add(SiteSettings(id=SETTINGS_ID, **SETTINGS_DEFAULTS))
            await session.commit()
            if log:
                await log.log_info("startup", "Создана строка настроек сайта")

        result = await session.execute(select(User).where(User.username == settings.ADMIN_USERNAME))
        if result.scalar_one_or_none() is None:
            session.add(User(
                username=settings.ADMIN_USERNAME,
                password_hash=hash_password(settings.ADMIN_PASSWORD),
                name=settings.ADMIN_NAME,
                email=settings.ADMIN_EMAIL,
                role="admin",
            ))
            await session.commit()
            if log:
                await log.log_info("startup", "Создан первый администратор", {"username": settings.ADMIN_USERNAME})
