# -*- coding: utf-8 -*-
"""Selection broadcast service shared by selection providers and views."""
from __future__ import annotations

from image_gallery.selection.service import (
    EMPTY_SELECTION,
    SelectionListener,
    SelectionService,
    StructuredSelection,
)

__all__ = [
    "EMPTY_SELECTION",
    "SelectionListener",
    "SelectionService",
    "StructuredSelection",
]
