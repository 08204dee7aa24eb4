# -*- coding: utf-8 -*-
"""image_gallery.log – minimal logging for the gallery view (file + stderr).

Usage::
    from image_gallery.log import get_logger
    log = get_logger("gallery_view")
    log.info("render pass: %d items", count)
    log.error("decode failed name=%r", name, exc_info=exc)
"""
from __future__ import annotations

import os
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

_APP_NAME = "ImageGallery"


def _default_log_file() -> str | None:
    """打包后的窗口程序默认写日志文件；开发态只输出到 stderr。"""
    override = os.environ.get("IMAGE_GALLERY_LOG_FILE", "").strip()
    if override:
        return override
    if not getattr(sys, "frozen", False):
        return None

    if sys.platform == "win32":
        base = (
            os.environ.get("LOCALAPPDATA")
            or os.environ.get("APPDATA")
            or str(Path.home() / "AppData" / "Local")
        )
        log_dir = Path(base) / _APP_NAME / "logs"
    elif sys.platform == "darwin":
        log_dir = Path.home() / "Library" / "Logs" / _APP_NAME
    else:
        log_dir = Path(os.environ.get("XDG_STATE_HOME") or (Path.home() / ".local" / "state")) / _APP_NAME

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return str(log_dir / "gallery.log")


LOG_FILE: str | None = _default_log_file()
LOG_LEVEL: str = os.environ.get("IMAGE_GALLERY_LOG_LEVEL", "DEBUG").upper()  # DEBUG | INFO | WARNING | ERROR

_LEVEL_ORDER = {"DEBUG": 0, "INFO": 1, "WARNING": 2, "ERROR": 3}


def _level_ok(level: str) -> bool:
    return _LEVEL_ORDER.get(level.upper(), 0) >= _LEVEL_ORDER.get(LOG_LEVEL.upper(), 0)


def _format(level: str, name: str, msg: str, *args: Any) -> str:
    parts = [datetime.now().strftime("%Y-%m-%d %H:%M:%S"), level, name, msg % args if args else msg]
    return " ".join(str(p) for p in parts)


def _format_cause(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()


class _Logger:
    def __init__(self, name: str) -> None:
        self._name = name
        self._file: TextIO | None = None
        if LOG_FILE:
            try:
                self._file = open(LOG_FILE, "a", encoding="utf-8")  # noqa: SIM115
            except OSError:
                pass

    @property
    def name(self) -> str:
        return self._name

    def _write(self, level: str, msg: str, *args: Any, exc_info: BaseException | None = None) -> None:
        if not _level_ok(level):
            return
        line = _format(level, self._name, msg, *args) + "\n"
        if exc_info is not None:
            line += _format_cause(exc_info) + "\n"
        if self._file:
            try:
                self._file.write(line)
                self._file.flush()
            except OSError:
                pass
        err = sys.stderr
        if err is None or not hasattr(err, "write"):
            return
        try:
            err.write(line)
            err.flush()
        except OSError:
            pass

    def debug(self, msg: str, *args: Any) -> None:
        self._write("DEBUG", msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._write("INFO", msg, *args)

    def warning(self, msg: str, *args: Any, exc_info: BaseException | None = None) -> None:
        self._write("WARNING", msg, *args, exc_info=exc_info)

    def error(self, msg: str, *args: Any, exc_info: BaseException | None = None) -> None:
        self._write("ERROR", msg, *args, exc_info=exc_info)


def get_logger(name: str) -> _Logger:
    return _Logger(name)


def get_log_file_path() -> str | None:
    return LOG_FILE
