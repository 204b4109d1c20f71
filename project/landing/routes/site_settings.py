# landing/routes/site_settings.py

from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from landing.routes.auth import require_auth
from landing.schemas.auth import SessionContext
from landing.schemas.site_settings import SiteTitleUpdate, LandingTextsUpdate, ScriptsUpdate
from landing.services import site_settings as settings_service
from landing.services.upload import UploadPurpose, save_upload, discard_upload

router = APIRouter()


# ────────────── READ ──────────────
@router.get(
    "",
    summary="Настройки сайта",
    responses={200: {"description": "Текущие настройки"}, 401: {"description": "Нет сессии"}},
)
async def get_settings(request: Request, _: SessionContext = Depends(require_auth)):
    current = await settings_service.get_settings(request.state.db)
    return {"success": True, "settings": current.model_dump()}


@router.get(
    "/public",
    summary="Настройки для лендинга (без авторизации)",
    responses={200: {"description": "Заголовки, тексты, логотип и ID скриптов"}},
)
async def get_public_settings(request: Request):
    current = await settings_service.get_public_settings(request.state.db)
    return {"success": True, "settings": current.model_dump()}


# ────────────── UPLOADS ──────────────
@router.post(
    "/logo",
    summary="Загрузка логотипа",
    responses={
        200: {"description": "Логотип сохранён"},
        400: {"description": "Нет файла, неверный тип или файл больше 5MB"},
        401: {"description": "Нет сессии"},
    },
)
async def upload_logo(
    request: Request,
    logo: Optional[UploadFile] = File(None),
    _: SessionContext = Depends(require_auth),
):
    log = request.app.state.log
    path = await save_upload(UploadPurpose.LOGO, logo, log)
    try:
        await settings_service.set_logo_path(path, request.state.db, log)
    except Exception:
        await discard_upload(path, log)
        raise
    return {"success": True, "message": "Logo atualizada com sucesso", "logoPath": path}


@router.post(
    "/favicon",
    summary="Загрузка favicon",
    responses={
        200: {"description": "Favicon сохранён"},
        400: {"description": "Нет файла, неверный тип или файл больше 5MB"},
        401: {"description": "Нет сессии"},
    },
)
async def upload_favicon(
    request: Request,
    favicon: Optional[UploadFile] = File(None),
    _: SessionContext = Depends(require_auth),
):
    log = request.app.state.log
    path = await save_upload(UploadPurpose.FAVICON, favicon, log)
    try:
        await settings_service.set_favicon_path(path, request.state.db, log)
    except Exception:
        await discard_upload(path, log)
        raise
    return {"success": True, "message": "Favicon atualizado com sucesso", "faviconPath": path}


@router.post(
    "/ebook",
    summary="Загрузка PDF e-book",
    responses={
        200: {"description": "E-book сохранён"},
        400: {"description": "Нет файла, не PDF или файл больше 10MB"},
        401: {"description": "Нет сессии"},
    },
)
async def upload_ebook(
    request: Request,
    ebook: Optional[UploadFile] = File(None),
    _: SessionContext = Depends(require_auth),
):
    log = request.app.state.log
    path = await save_upload(UploadPurpose.EBOOK, ebook, log)
    try:
        await settings_service.set_ebook_path(path, request.state.db, log)
    except Exception:
        await discard_upload(path, log)
        raise
    return {"success": True, "message": "E-book atualizado com sucesso", "path": path}


# ────────────── TEXTS ──────────────
@router.post(
    "/title",
    summary="Заголовок сайта",
    responses={200: {"description": "Заголовок обновлён"}, 400: {"description": "Пустой или длиннее 255 символов"}},
)
async def update_title(body: SiteTitleUpdate, request: Request, _: SessionContext = Depends(require_auth)):
    await settings_service.set_site_title(body.siteTitle, request.state.db, request.app.state.log)
    return {"success": True, "message": "Título do site atualizado com sucesso", "siteTitle": body.siteTitle}


@router.post(
    "/landing-texts",
    summary="Тексты лендинга",
    responses={200: {"description": "Тексты обновлены"}, 400: {"description": "Пустой заголовок или подзаголовок"}},
)
async def update_landing_texts(body: LandingTextsUpdate, request: Request, _: SessionContext = Depends(require_auth)):
    await settings_service.set_landing_texts(body, request.state.db, request.app.state.log)
    return {"success": True, "message": "Textos da landing page atualizados com sucesso"}


@router.post(
    "/scripts",
    summary="Meta Pixel, Google Analytics, Google Tag Manager",
    responses={200: {"description": "Скрипты обновлены"}},
)
async def update_scripts(body: ScriptsUpdate, request: Request, _: SessionContext = Depends(require_auth)):
    await settings_service.set_scripts(body, request.state.db, request.app.state.log)
    return {"success": True, "message": "Scripts atualizados com sucesso"}
