# -*- coding: utf-8 -*-
"""
调用系统程序：用默认关联程序打开文件、在文件管理器中定位文件。
- macOS  : open / open -R
- Windows: os.startfile / explorer /select,
- Linux  : xdg-open
"""
from __future__ import annotations

import os
import subprocess
import sys

from image_gallery.log import get_logger

_log = get_logger("launcher")


def launch_with_default_app(path: str) -> None:
    """用系统默认关联程序打开文件；失败只记录 warning。"""
    try:
        norm_path = os.path.normpath(os.path.abspath(path))
        _log.info("[launch_with_default_app] platform=%r path=%r", sys.platform, norm_path)
        if sys.platform == "darwin":
            subprocess.Popen(["open", norm_path])
        elif os.name == "nt":
            os.startfile(norm_path)  # type: ignore[attr-defined]
        else:
            subprocess.Popen(["xdg-open", norm_path])
    except Exception as e:
        _log.warning("[launch_with_default_app] failed path=%r: %s", path, e)


def reveal_in_file_manager(path: str) -> None:
    """在系统文件管理器中定位并高亮显示指定文件或目录。"""
    try:
        _log.info(
            "[reveal_in_file_manager] platform=%r path=%r exists=%s",
            sys.platform,
            path,
            os.path.exists(path) if path else False,
        )
        if sys.platform == "darwin":
            subprocess.Popen(["open", "-R", os.path.normpath(os.path.abspath(path))])
        elif os.name == "nt":
            norm_path = os.path.normpath(os.path.abspath(path))
            if os.path.isfile(norm_path):
                args = ["explorer.exe", f"/select,{norm_path}"]
            else:
                args = ["explorer.exe", norm_path]
            subprocess.Popen(args)
        else:
            parent = os.path.dirname(path) if os.path.isfile(path) else path
            subprocess.Popen(["xdg-open", parent])
    except Exception as e:
        _log.warning("[reveal_in_file_manager] failed path=%r: %s", path, e)
