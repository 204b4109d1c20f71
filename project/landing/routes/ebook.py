# landing/routes/ebook.py

import os

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from landing.config import settings
from landing.services.site_settings import get_settings
from landing.services.upload import local_path
from landing.utils.errors import NotFound

router = APIRouter()


@router.get(
    "/download",
    summary="Скачать e-book",
    response_class=FileResponse,
    responses={
        200: {"description": "PDF", "content": {"application/pdf": {}}},
        404: {"description": "Файл e-book не найден"},
    },
)
async def download_ebook(request: Request):
    """
    Отдаёт PDF из настроек сайта (загруженный через /settings/ebook)
    или файл по умолчанию из пакета.
    """
    log = request.app.state.log
    current = await get_settings(request.state.db)

    if current.ebook_path:
        path = local_path(current.ebook_path)
    else:
        path = settings.EBOOK_FALLBACK_PATH

    if not os.path.isfile(path):
        await log.log_error("ebook", "E-book не найден", {"path": path})
        raise NotFound("E-book não encontrado")

    await log.log_info("ebook", "E-book скачан", {"path": path})
    return FileResponse(path, media_type="application/pdf", filename=settings.EBOOK_DOWNLOAD_NAME)
