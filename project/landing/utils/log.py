# landing/utils/log.py
# Журнал событий: один файл на день, LOG_DIR/2025/10/04.log

import os
import datetime
import logging
from aiologger import Logger
from aiologger.handlers.files import AsyncFileHandler

from landing.config import settings

# Поля, которые никогда не попадают в лог
HIDDEN_FIELDS = {"password", "password_hash"}


class Log:
    def __init__(self, log_dir: str | None = None):
        self.log_dir = log_dir or settings.LOG_DIR
        os.makedirs(self.log_dir, exist_ok=True)
        self.handlers = {}
        self.log_print = str(settings.LOG_PRINT).lower() in ("1", "true", "yes")

    def build_log_path(self, now: datetime.datetime) -> str:
        """
        Путь к лог-файлу за день:
        LOG_DIR/2025/10/04.log
        """
        base_dir = os.path.join(self.log_dir, f"{now.year}", f"{now:%m}")
        os.makedirs(base_dir, exist_ok=True)
        return os.path.join(base_dir, f"{now:%d}.log")

    def format_line(self, target: str, message: str, data: dict | None, now: datetime.datetime) -> str:
        line = f"{now:%d.%m.%Y %H:%M:%S} {target}: {message}"
        if data:
            line += f": {self.safe_serialize(data)}"
        return line

    async def get_logger(self, target: str, now: datetime.datetime) -> Logger:
        """Асинхронный логгер для target, пересоздаётся при смене дня."""
        log_path = self.build_log_path(now)

        current = self.handlers.get(target)
        if current is None or current["path"] != log_path:
            handler = AsyncFileHandler(filename=log_path, mode="a", encoding="utf-8")
            target_logger = Logger(name=f"landing_{target}")
            target_logger.add_handler(handler)

            if current is not None:
                await current["logger"].shutdown()

            self.handlers[target] = {"path": log_path, "logger": target_logger}

        return self.handlers[target]["logger"]

    # ────────────── Асинхронные методы ──────────────
    async def log_info(
        self,
        target: str = "",
        message: str = "",
        data: dict | None = None,
        is_console: bool | None = None,
    ):
        now = datetime.datetime.now()
        line = self.format_line(target, message, data, now)

        target_logger = await self.get_logger(target, now)
        await target_logger.info(line)

        should_print = self.log_print if is_console is None else is_console
        if should_print:
            print(line)

    async def log_warning(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = None):
        await self.log_info(target, f"WARNING: {message}", data, is_console)

    async def log_error(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = True):
        await self.log_info(target, f"ERROR: {message}", data, is_console)

    # ────────────── Синхронные методы (старт до event loop) ──────────────
    def log_info_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = None):
        now = datetime.datetime.now()
        log_path = self.build_log_path(now)
        line = self.format_line(target, message, data, now)

        logger = logging.getLogger(f"landing_sync_{target}")
        logger.setLevel(logging.INFO)
        logger.propagate = False

        # при смене дня переключаем файл
        for handler in list(logger.handlers):
            if getattr(handler, "baseFilename", None) != os.path.abspath(log_path):
                logger.removeHandler(handler)
                handler.close()
        if not logger.handlers:
            handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(message)s"))
            logger.addHandler(handler)

        logger.info(line)

        should_print = self.log_print if is_console is None else is_console
        if should_print:
            print(line)

    def log_warning_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = None):
        self.log_info_sync(target, f"WARNING: {message}", data, is_console)

    def log_error_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = True):
        self.log_info_sync(target, f"ERROR: {message}", data, is_console)

    def safe_serialize(self, obj):
        """
        Приводит объект к виду, пригодному для записи в лог:
        - dict, list, tuple, set рекурсивно
        - Pydantic модели через model_dump
        - ORM-объекты через публичные атрибуты
        - пароли и хэши паролей вырезаются
        """
        if obj is None:
            return None
        elif isinstance(obj, (str, int, float, bool)):
            return obj
        elif isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        elif isinstance(obj, dict):
            return {k: self.safe_serialize(v) for k, v in obj.items() if k not in HIDDEN_FIELDS}
        elif isinstance(obj, (list, tuple, set)):
            return [self.safe_serialize(v) for v in obj]
        elif hasattr(obj, "model_dump"):  # Pydantic
            return self.safe_serialize(obj.model_dump())
        elif hasattr(obj, "__dict__"):
            return {
                k: self.safe_serialize(v)
                for k, v in vars(obj).items()
                if not k.startswith("_") and k not in HIDDEN_FIELDS
            }
        else:
            return f"<{type(obj).__name__}>"

    async def shutdown(self):
        for entry in list(self.handlers.values()):
            await entry["logger"].shutdown()
        self.handlers.clear()
