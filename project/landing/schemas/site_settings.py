# landing/schemas/site_settings.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

SITE_TITLE_MAX = 255


class SiteSettingsResponse(BaseModel):
    id: int
    logo_path: Optional[str] = None
    favicon_path: Optional[str] = None
    site_title: str
    hero_title: str
    hero_subtitle: str
    hero_text_1: str
    hero_text_2: str
    ebook_path: Optional[str] = None
    meta_pixel: Optional[str] = None
    google_analytics: Optional[str] = None
    google_tag_manager: Optional[str] = None
    updated_at: Optional[datetime] = None


class PublicSettings(BaseModel):
    """То, что нужно лендингу без авторизации."""
    logo_path: Optional[str] = None
    favicon_path: Optional[str] = None
    site_title: str
    hero_title: str
    hero_subtitle: str
    hero_text_1: str
    hero_text_2: str
    meta_pixel: Optional[str] = None
    google_analytics: Optional[str] = None
    google_tag_manager: Optional[str] = None


class SiteTitleUpdate(BaseModel):
    siteTitle: str


# ────────────── Частичные обновления: отсутствующее поле не меняется ──────────────
class LandingTextsUpdate(BaseModel):
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    hero_text_1: Optional[str] = None
    hero_text_2: Optional[str] = None


class ScriptsUpdate(BaseModel):
    meta_pixel: Optional[str] = Field(None, description="ID do Meta Pixel; null ou vazio remove")
    google_analytics: Optional[str] = None
    google_tag_manager: Optional[str] = None
