# -*- coding: utf-8 -*-
"""缩略图条目、尺寸档位与状态栏文本。"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from image_gallery.gallery_view.config import GallerySettings, SizePolicy
from image_gallery.gallery_view.decoder import Bitmap
from image_gallery.resources import StorageResource, is_single_resource_selection


class SizeClass(Enum):
    SMALL = "small"
    LARGE = "large"


@dataclass
class ThumbnailItem:
    item_id: int
    resource: StorageResource
    bitmap: Bitmap
    size_class: SizeClass

    @property
    def name(self) -> str:
        return self.resource.name


def choose_size_class(policy: SizePolicy, raw_nodes, resolved: list) -> SizeClass:
    if policy is SizePolicy.RAW_SELECTION:
        return SizeClass.LARGE if is_single_resource_selection(raw_nodes) else SizeClass.SMALL
    return SizeClass.LARGE if len(resolved) == 1 else SizeClass.SMALL


def pixel_size_for(size_class: SizeClass, settings: GallerySettings) -> int:
    return settings.large_size if size_class is SizeClass.LARGE else settings.small_size


def format_status(item: ThumbnailItem | None) -> str:
    """``"<name> (<width> x <height>)"``；无条目或无图像时为空串。"""
    if item is None:
        return ""
    bitmap = item.bitmap
    if bitmap is None or bitmap.is_disposed:
        return ""
    return f"{item.name} ({bitmap.width} x {bitmap.height})"
