# -*- coding: utf-8 -*-
"""
图库视图配置：从模块内 gallery.cfg 读取默认值，可用外部 override 文件合并覆盖。
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from enum import Enum

_DEFAULT_EXTENSIONS = ("bmp", "gif", "png", "jpg", "jpeg", "tif", "tiff", "ico", "svg")
_KNOWN_KEYS = (
    "extensions",
    "small_size",
    "large_size",
    "size_policy",
    "min_margin",
    "decode_max_edge",
)


class SizePolicy(Enum):
    """
    大尺寸缩略图的判定策略。

    - RESOLVED：过滤后恰好剩一张图片时使用大尺寸
    - RAW_SELECTION：原始选择恰好是一个文件时使用大尺寸（不论是否为图片）
    """

    RESOLVED = "resolved"
    RAW_SELECTION = "raw_selection"


@dataclass(frozen=True)
class GallerySettings:
    extensions: frozenset = frozenset(_DEFAULT_EXTENSIONS)
    small_size: int = 64
    large_size: int = 128
    size_policy: SizePolicy = SizePolicy.RESOLVED
    min_margin: int = 2
    decode_max_edge: int = 512


def _module_cfg_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "gallery.cfg")


def _load_raw_cfg(path: str) -> dict:
    """读取 JSON 配置文件，返回顶层字典；失败时返回空字典。"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, ValueError):
        return {}


def _positive_int(value, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def _parse_extensions(value) -> frozenset:
    if not isinstance(value, (list, tuple)):
        return frozenset(_DEFAULT_EXTENSIONS)
    exts = frozenset(
        str(v).strip().lower().lstrip(".") for v in value
        if isinstance(v, str) and v.strip().lstrip(".")
    )
    return exts or frozenset(_DEFAULT_EXTENSIONS)


def _parse_policy(value) -> SizePolicy:
    try:
        return SizePolicy(str(value).strip().lower())
    except ValueError:
        return SizePolicy.RESOLVED


def settings_from_dict(data: dict) -> GallerySettings:
    """将配置字典转换为 GallerySettings；非法值回退为默认值。"""
    defaults = GallerySettings()
    small = _positive_int(data.get("small_size"), defaults.small_size)
    large = _positive_int(data.get("large_size"), defaults.large_size)
    max_edge = _positive_int(data.get("decode_max_edge"), defaults.decode_max_edge)
    margin = data.get("min_margin", defaults.min_margin)
    margin = margin if isinstance(margin, int) and not isinstance(margin, bool) and margin >= 0 else defaults.min_margin
    return GallerySettings(
        extensions=_parse_extensions(data.get("extensions")),
        small_size=small,
        large_size=large,
        size_policy=_parse_policy(data.get("size_policy", defaults.size_policy.value)),
        min_margin=margin,
        decode_max_edge=max(max_edge, large),
    )


def load_gallery_settings(override_path: str | None = None) -> GallerySettings:
    """读取图库配置：先读模块 gallery.cfg，若提供 override_path 且文件存在则合并覆盖。"""
    data = _load_raw_cfg(_module_cfg_path())
    if override_path and os.path.isfile(override_path):
        over = _load_raw_cfg(override_path)
        for k in _KNOWN_KEYS:
            if k in over:
                data[k] = over[k]
    return settings_from_dict(data)
