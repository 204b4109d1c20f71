# tests/test_uploads.py

import os

import pytest

from landing.config import settings
from landing.services.upload import (
    MB,
    UploadPurpose,
    unique_filename,
    validate_upload,
)
from landing.utils.errors import FileTooLarge, InvalidFileType

PNG = b"\x89PNG\r\n\x1a\n"
PDF = b"%PDF-1.4\n"


def uploaded_files():
    return sorted(os.listdir(settings.UPLOAD_DIR))


def test_validate_upload_rules():
    assert validate_upload(UploadPurpose.LOGO, "image/png", 2 * MB) == ".png"
    assert validate_upload(UploadPurpose.FAVICON, "image/x-icon", 1024) == ".ico"
    assert validate_upload(UploadPurpose.EBOOK, "application/pdf", 10 * MB) == ".pdf"
    with pytest.raises(InvalidFileType):
        validate_upload(UploadPurpose.LOGO, "text/plain", 10)
    with pytest.raises(InvalidFileType):
        validate_upload(UploadPurpose.EBOOK, "image/png", 10)
    with pytest.raises(FileTooLarge):
        validate_upload(UploadPurpose.LOGO, "image/png", 5 * MB + 1)
    with pytest.raises(FileTooLarge):
        validate_upload(UploadPurpose.EBOOK, "application/pdf", 10 * MB + 1)


def test_unique_filenames_do_not_repeat():
    names = {unique_filename(UploadPurpose.LOGO, ".png") for _ in range(200)}
    assert len(names) == 200
    assert all(name.startswith("logo-") and name.endswith(".png") for name in names)


def test_txt_logo_is_invalid_type(admin_client):
    response = admin_client.post("/api/settings/logo", files={"logo": ("logo.txt", b"hello", "text/plain")})
    assert response.status_code == 400
    assert response.json()["message"].startswith("Tipo de arquivo não permitido")
    assert uploaded_files() == []


def test_six_mb_image_is_too_large(admin_client):
    data = PNG + b"0" * (6 * MB)
    response = admin_client.post("/api/settings/logo", files={"logo": ("big.png", data, "image/png")})
    assert response.status_code == 400
    assert "5MB" in response.json()["message"]
    assert uploaded_files() == []


def test_two_mb_png_updates_logo_path(admin_client):
    data = PNG + b"0" * (2 * MB)
    response = admin_client.post("/api/settings/logo", files={"logo": ("logo.png", data, "image/png")})
    assert response.status_code == 200
    logo_path = response.json()["logoPath"]
    assert logo_path.startswith("/upload/logo-") and logo_path.endswith(".png")

    assert admin_client.get("/api/settings").json()["settings"]["logo_path"] == logo_path
    served = admin_client.get(logo_path)
    assert served.status_code == 200
    assert served.content == data


def test_same_name_twice_keeps_both(admin_client):
    first = admin_client.post("/api/settings/favicon", files={"favicon": ("f.ico", b"1", "image/x-icon")}).json()
    second = admin_client.post("/api/settings/favicon", files={"favicon": ("f.ico", b"2", "image/x-icon")}).json()
    assert first["faviconPath"] != second["faviconPath"]
    assert len(uploaded_files()) == 2
    assert admin_client.get("/api/settings").json()["settings"]["favicon_path"] == second["faviconPath"]


def test_missing_file_is_400(admin_client):
    response = admin_client.post("/api/settings/logo", data={"other": "x"})
    assert response.status_code == 400


def test_ebook_must_be_pdf(admin_client):
    response = admin_client.post("/api/settings/ebook", files={"ebook": ("e.png", PNG, "image/png")})
    assert response.status_code == 400


def test_ebook_download_fallback(client):
    response = client.get("/api/ebook/download")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
    assert settings.EBOOK_DOWNLOAD_NAME in response.headers["content-disposition"]


def test_ebook_download_uses_uploaded_file(admin_client):
    data = PDF + b"conteudo do ebook"
    response = admin_client.post("/api/settings/ebook", files={"ebook": ("guia.pdf", data, "application/pdf")})
    assert response.status_code == 200
    assert response.json()["path"].startswith("/upload/ebook-")

    download = admin_client.get("/api/ebook/download")
    assert download.status_code == 200
    assert download.content == data


def test_ebook_download_missing_file_is_404(admin_client):
    data = PDF + b"x"
    path = admin_client.post("/api/settings/ebook", files={"ebook": ("guia.pdf", data, "application/pdf")}).json()["path"]
    os.remove(os.path.join(settings.UPLOAD_DIR, os.path.basename(path)))

    response = admin_client.get("/api/ebook/download")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_failed_settings_update_removes_file(admin_client, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from landing.services import site_settings as settings_service

    async def broken(path, db, log):
        raise OperationalError("UPDATE site_settings", {}, Exception("disk I/O error"))

    monkeypatch.setattr(settings_service, "set_logo_path", broken)
    response = admin_client.post("/api/settings/logo", files={"logo": ("logo.png", PNG, "image/png")})
    assert response.status_code == 500
    assert uploaded_files() == []
    assert admin_client.get("/api/settings").json()["settings"]["logo_path"] is None
