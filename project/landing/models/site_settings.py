# landing/models/site_settings.py

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from landing.utils.database import Base

# Единственная строка настроек
SETTINGS_ID = 1

# Значения по умолчанию для текстовых полей
SETTINGS_DEFAULTS = {
    "site_title": "Corteiia",
    "hero_title": "7 Dicas Infalíveis para Lotar sua Agenda de Clientes",
    "hero_subtitle": "Sua barbearia ou salão está realmente atraindo novos clientes?",
    "hero_text_1": (
        "Sua barbearia ou salão não pode mais ser reativo. Nós realizamos pesquisas constantes "
        "para descobrir o que gera os melhores resultados e o que é perda de tempo, para que você "
        "possa ser proativo. Seja para ajustar as estratégias para o próximo semestre ou já planejar "
        "o próximo ano, ter o método certo é essencial."
    ),
    "hero_text_2": (
        "Nossos especialistas compilaram as 7 dicas mais eficazes neste e-book gratuito, focando em "
        "criar um serviço de barbearia ou salão que impulsiona os resultados e fideliza clientes."
    ),
}


class SiteSettings(Base):
    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, default=SETTINGS_ID)
    logo_path = Column(String(500), nullable=True)
    favicon_path = Column(String(500), nullable=True)
    site_title = Column(String(255), nullable=True)
    hero_title = Column(String(500), nullable=True)
    hero_subtitle = Column(String(500), nullable=True)
    hero_text_1 = Column(Text, nullable=True)
    hero_text_2 = Column(Text, nullable=True)
    ebook_path = Column(String(500), nullable=True)
    meta_pixel = Column(Text, nullable=True)
    google_analytics = Column(Text, nullable=True)
    google_tag_manager = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
