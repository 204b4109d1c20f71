# tests/test_site_settings.py

import asyncio

import pytest

from landing.models.site_settings import SETTINGS_DEFAULTS
from landing.schemas.site_settings import LandingTextsUpdate, ScriptsUpdate
from landing.services import site_settings as service
from landing.utils.database import AsyncSessionLocal
from landing.utils.errors import ValidationError


def test_get_settings_has_defaults(admin_client):
    body = admin_client.get("/api/settings").json()
    assert body["success"] is True
    current = body["settings"]
    assert current["id"] == 1
    assert current["site_title"] == SETTINGS_DEFAULTS["site_title"]
    assert current["hero_title"] == SETTINGS_DEFAULTS["hero_title"]
    assert current["logo_path"] is None


def test_public_settings_need_no_session(client):
    response = client.get("/api/settings/public")
    assert response.status_code == 200
    current = response.json()["settings"]
    assert current["site_title"] == SETTINGS_DEFAULTS["site_title"]
    assert "ebook_path" not in current


def test_site_title_bounds(admin_client):
    ok = admin_client.post("/api/settings/title", json={"siteTitle": "a" * 255})
    assert ok.status_code == 200
    too_long = admin_client.post("/api/settings/title", json={"siteTitle": "b" * 256})
    assert too_long.status_code == 400
    assert admin_client.get("/api/settings").json()["settings"]["site_title"] == "a" * 255


def test_empty_site_title_is_rejected(admin_client):
    assert admin_client.post("/api/settings/title", json={"siteTitle": "  "}).status_code == 400


def test_landing_texts_partial(admin_client):
    response = admin_client.post("/api/settings/landing-texts", json={"hero_text_1": "Novo texto"})
    assert response.status_code == 200

    current = admin_client.get("/api/settings").json()["settings"]
    assert current["hero_text_1"] == "Novo texto"
    assert current["hero_title"] == SETTINGS_DEFAULTS["hero_title"]
    assert current["hero_text_2"] == SETTINGS_DEFAULTS["hero_text_2"]


def test_landing_texts_empty_title_rejected(admin_client):
    response = admin_client.post("/api/settings/landing-texts", json={"hero_title": ""})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "hero_title"


def test_scripts_partial_and_clear(admin_client):
    admin_client.post("/api/settings/scripts", json={"meta_pixel": "123456", "google_analytics": "G-ABC"})
    admin_client.post("/api/settings/scripts", json={"google_tag_manager": "GTM-XYZ"})
    current = admin_client.get("/api/settings").json()["settings"]
    assert current["meta_pixel"] == "123456"
    assert current["google_analytics"] == "G-ABC"
    assert current["google_tag_manager"] == "GTM-XYZ"

    admin_client.post("/api/settings/scripts", json={"meta_pixel": ""})
    current = admin_client.get("/api/settings").json()["settings"]
    assert current["meta_pixel"] is None
    assert current["google_analytics"] == "G-ABC"


async def test_set_site_title_service_bounds(db, log):
    await service.set_site_title("x" * 255, db, log)
    with pytest.raises(ValidationError):
        await service.set_site_title("x" * 256, db, log)
    assert (await service.get_settings(db)).site_title == "x" * 255


async def test_concurrent_updaters_touch_only_their_fields(db, log):
    async def title():
        async with AsyncSessionLocal() as session:
            await service.set_site_title("Barbearia Centro", session, log)

    async def texts():
        async with AsyncSessionLocal() as session:
            await service.set_landing_texts(LandingTextsUpdate(hero_subtitle="Agenda cheia"), session, log)

    async def scripts():
        async with AsyncSessionLocal() as session:
            await service.set_scripts(ScriptsUpdate(meta_pixel="999"), session, log)

    await asyncio.gather(title(), texts(), scripts())

    current = await service.get_settings(db)
    assert current.site_title == "Barbearia Centro"
    assert current.hero_subtitle == "Agenda cheia"
    assert current.meta_pixel == "999"
    assert current.hero_title == SETTINGS_DEFAULTS["hero_title"]
    assert current.logo_path is None


async def test_settings_row_recreated_when_missing(db, log):
    from sqlalchemy import delete, func, select
    from landing.models.site_settings import SiteSettings

    await db.execute(delete(SiteSettings))
    await db.commit()

    await service.set_logo_path("/upload/logo-1.png", db, log)
    count = (await db.execute(select(func.count()).select_from(SiteSettings))).scalar_one()
    assert count == 1
    assert (await service.get_settings(db)).logo_path == "/upload/logo-1.png"


async def test_missing_row_recreated_once_under_concurrency(db, log):
    from sqlalchemy import delete, func, select
    from landing.models.site_settings import SiteSettings

    await db.execute(delete(SiteSettings))
    await db.commit()

    async def title(value):
        async with AsyncSessionLocal() as session:
            await service.set_site_title(value, session, log)

    await asyncio.gather(title("Primeiro"), title("Segundo"))

    count = (await db.execute(select(func.count()).select_from(SiteSettings))).scalar_one()
    assert count == 1
    assert (await service.get_settings(db)).site_title in ("Primeiro", "Segundo")
