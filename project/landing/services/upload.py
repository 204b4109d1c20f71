# landing/services/upload.py

"""
Загрузка файлов: логотип, favicon и PDF e-book.

Тип и размер проверяются до записи на диск. Имя файла строится из
назначения, времени в миллисекундах и случайного суффикса; файл открывается
в режиме "xb", так что существующая загрузка никогда не перезаписывается.
"""

import os
import time
import secrets
from enum import Enum

import aiofiles
from fastapi import UploadFile

from landing.config import settings
from landing.utils.errors import InvalidFileType, FileTooLarge, InternalError, ValidationError
from landing.utils.log import Log

PUBLIC_PREFIX = "/upload"

MB = 1024 * 1024

IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/svg+xml": ".svg",
    "image/x-icon": ".ico",
    "image/vnd.microsoft.icon": ".ico",
}
DOCUMENT_TYPES = {
    "application/pdf": ".pdf",
}


class UploadPurpose(str, Enum):
    LOGO = "logo"
    FAVICON = "favicon"
    EBOOK = "ebook"


# назначение -> (допустимые MIME с расширением, лимит в байтах, сообщение об ошибке типа)
RULES = {
    UploadPurpose.LOGO: (IMAGE_TYPES, 5 * MB, "Use apenas imagens (JPEG, PNG, GIF, SVG, ICO)"),
    UploadPurpose.FAVICON: (IMAGE_TYPES, 5 * MB, "Use apenas imagens (JPEG, PNG, GIF, SVG, ICO)"),
    UploadPurpose.EBOOK: (DOCUMENT_TYPES, 10 * MB, "Use apenas arquivos PDF"),
}


def normalize_content_type(content_type: str | None) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def unique_filename(purpose: UploadPurpose, extension: str) -> str:
    return f"{purpose.value}-{int(time.time() * 1000)}-{secrets.token_hex(4)}{extension}"


def public_path(filename: str) -> str:
    return f"{PUBLIC_PREFIX}/{filename}"


def local_path(path: str, upload_dir: str | None = None) -> str:
    """Путь на диске для публичного пути /upload/<имя>."""
    return os.path.join(upload_dir or settings.UPLOAD_DIR, os.path.basename(path))


def validate_upload(purpose: UploadPurpose, content_type: str | None, size: int) -> str:
    """
    Проверяет тип и размер, возвращает расширение файла.
    InvalidFileType / FileTooLarge — ошибки клиента (400).
    """
    allowed, limit, type_message = RULES[purpose]
    mime = normalize_content_type(content_type)
    if mime not in allowed:
        raise InvalidFileType(f"Tipo de arquivo não permitido. {type_message}.")
    if size > limit:
        raise FileTooLarge(f"Arquivo excede o limite de {limit // MB}MB")
    return allowed[mime]


async def save_upload(
    purpose: UploadPurpose,
    upload: UploadFile | None,
    log: Log,
    upload_dir: str | None = None,
) -> str:
    """
    Сохраняет загруженный файл и возвращает публичный путь /upload/<имя>.
    """
    if upload is None:
        raise ValidationError("Nenhum arquivo enviado")

    _, limit, _ = RULES[purpose]
    # читаем не больше лимита + 1 байт: этого достаточно, чтобы понять, что файл слишком большой
    data = await upload.read(limit + 1)
    try:
        extension = validate_upload(purpose, upload.content_type, len(data))
    except (InvalidFileType, FileTooLarge) as e:
        await log.log_warning("upload", e.detail, {
            "purpose": purpose.value,
            "filename": upload.filename,
            "content_type": upload.content_type,
        })
        raise

    target_dir = upload_dir or settings.UPLOAD_DIR
    filename = unique_filename(purpose, extension)
    try:
        os.makedirs(target_dir, exist_ok=True)
        async with aiofiles.open(os.path.join(target_dir, filename), "xb") as f:
            await f.write(data)
    except OSError as e:
        await log.log_error("upload", f"Ошибка записи файла: {e}", {"filename": filename})
        raise InternalError("Erro ao salvar o arquivo")

    await log.log_info("upload", "Файл сохранён", {"purpose": purpose.value, "filename": filename, "size": len(data)})
    return public_path(filename)


async def discard_upload(path: str, log: Log, upload_dir: str | None = None) -> None:
    """Удаляет сохранённый файл, если путь к нему так и не попал в настройки."""
    target = local_path(path, upload_dir)
    try:
        os.remove(target)
    except FileNotFoundError:
        return
    await log.log_warning("upload", "Файл удалён: настройки не обновлены", {"path": path})
