# -*- coding: utf-8 -*-
"""
image_gallery.gallery_view
==========================
图像缩略图视图。配置见 gallery.cfg。

用法::

    from image_gallery.gallery_view import GalleryView
    from image_gallery.selection import SelectionService

    service = SelectionService()
    view = GalleryView(service)
    view.status_changed.connect(status_bar.showMessage)
    ...
    view.dispose()

对外暴露的公开符号：

- ``GalleryView`` — 视图本体（监听选择 → 渲染缩略图）
- ``ThumbnailGrid`` — 缩略图网格控件
- ``ImageDecoder`` / ``Bitmap`` / ``DecodeError`` / ``live_bitmap_count``
- ``GallerySettings`` / ``SizePolicy`` / ``load_gallery_settings``
"""
from __future__ import annotations

from image_gallery.gallery_view.config import GallerySettings, SizePolicy, load_gallery_settings
from image_gallery.gallery_view.decoder import (
    Bitmap,
    DecodeError,
    ImageDecoder,
    live_bitmap_count,
    probe_svg_support,
)
from image_gallery.gallery_view.grid import ThumbnailGrid
from image_gallery.gallery_view.items import SizeClass, ThumbnailItem, format_status
from image_gallery.gallery_view.view import GalleryView, PanelState

__all__ = [
    "GallerySettings",
    "SizePolicy",
    "load_gallery_settings",
    "Bitmap",
    "DecodeError",
    "ImageDecoder",
    "live_bitmap_count",
    "probe_svg_support",
    "ThumbnailGrid",
    "SizeClass",
    "ThumbnailItem",
    "format_status",
    "GalleryView",
    "PanelState",
]
