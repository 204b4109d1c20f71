# landing/main.py

import os
import multiprocessing
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- загрузка переменных окружения ---
load_dotenv()

from landing.config import settings
from landing.utils.log import Log
from landing.utils.database import init_db
from landing.middleware.db_middleware import DBSessionMiddleware

# --- sync логгер для раннего старта ---
boot_log = Log()
if os.environ.get("RUN_MAIN") == "true" or multiprocessing.current_process().name == "MainProcess":
    boot_log.log_info_sync(target="startup", message="Импорты main.py выполнены")

# каталог загрузок должен существовать до монтирования /upload
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)


# ────────────── Lifespan ──────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

    app.state.log = Log()
    await init_db(app.state.log)
    await app.state.log.log_info(target="startup", message="База инициализирована")

    yield

    # shutdown
    await app.state.log.log_info(target="shutdown", message="Остановка приложения")
    await app.state.log.shutdown()
    boot_log.log_info_sync(target="shutdown", message="Log корректно завершён")


# ────────────── Создаём FastAPI приложение ──────────────
app = FastAPI(title="Landing Page & Admin API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# DB middleware для request.state.db
app.add_middleware(DBSessionMiddleware)


# ────────────── Ошибки → {"success": false, "message": ...} ──────────────
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    content = {"success": False, "message": exc.detail}
    errors = getattr(exc, "errors", None)
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "message": str(error.get("msg", "")).removeprefix("Value error, "),
        }
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"success": False, "message": "Dados inválidos", "errors": errors})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    await request.app.state.log.log_error("error", f"Ошибка базы данных: {exc}", {"path": request.url.path})
    return JSONResponse(status_code=500, content={"success": False, "message": "Erro interno do servidor"})


@app.exception_handler(OSError)
async def filesystem_error_handler(request: Request, exc: OSError):
    await request.app.state.log.log_error("error", f"Ошибка файловой системы: {exc}", {"path": request.url.path})
    return JSONResponse(status_code=500, content={"success": False, "message": "Erro interno do servidor"})


@app.get("/health")
def health():
    return {"status": "ok"}


# ────────────── Подключение роутов ──────────────
from landing.routes import auth, lead, user, site_settings, ebook

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(lead.router, prefix="/api/leads", tags=["leads"])
app.include_router(user.router, prefix="/api/users", tags=["users"])
app.include_router(site_settings.router, prefix="/api/settings", tags=["settings"])
app.include_router(ebook.router, prefix="/api/ebook", tags=["ebook"])

# Загруженные файлы
app.mount("/upload", StaticFiles(directory=settings.UPLOAD_DIR), name="upload")

# ────────────── Запуск uvicorn ──────────────
if __name__ == "__main__":
    boot_log.log_info_sync(target="startup", message="Запуск uvicorn.run")
    uvicorn.run(
        "landing.main:app",
        host="127.0.0.1",
        port=8000,
        log_level="info",
        reload=True
    )
