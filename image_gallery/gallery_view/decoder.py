# -*- coding: utf-8 -*-
"""
gallery_view.decoder
====================
将可浏览资源的字节流解码为 ``Bitmap``（QImage + 原始像素尺寸）。

- 位图格式（bmp/gif/png/jpg/tif/ico …）交给 Pillow；
- SVG 交给 QtSvg 的 ``QSvgRenderer``，是否可用在创建解码器时探测一次；
- 任何失败统一抛出 ``DecodeError``（保留原始异常为 __cause__）。

``Bitmap`` 需要显式 ``dispose()``；``live_bitmap_count()`` 返回尚未释放的位图数量，
用于检查反复切换选择后是否有泄漏。
"""
from __future__ import annotations

import io as _io

from PIL import Image, ImageOps

try:
    from PyQt6.QtCore import QByteArray, QRectF
    from PyQt6.QtGui import QColor, QImage, QPainter
    _QT_API = "PyQt6"
except ImportError:
    from PyQt5.QtCore import QByteArray, QRectF
    from PyQt5.QtGui import QColor, QImage, QPainter
    _QT_API = "PyQt5"

from image_gallery.log import get_logger

_log = get_logger("gallery_decoder")

try:
    _QImageRGB888 = QImage.Format.Format_RGB888
    _QImageRGB32 = QImage.Format.Format_RGB32
except AttributeError:
    _QImageRGB888 = QImage.Format_RGB888  # type: ignore[attr-defined]
    _QImageRGB32 = QImage.Format_RGB32  # type: ignore[attr-defined]

try:
    _PainterAntialiasing = QPainter.RenderHint.Antialiasing
    _PainterSmoothPixmap = QPainter.RenderHint.SmoothPixmapTransform
except AttributeError:
    _PainterAntialiasing = QPainter.Antialiasing  # type: ignore[attr-defined]
    _PainterSmoothPixmap = QPainter.SmoothPixmapTransform  # type: ignore[attr-defined]

VECTOR_EXTENSIONS = frozenset({"svg"})
TILE_BACKGROUND = (45, 45, 45)

_live_bitmaps = 0


class DecodeError(Exception):
    """图像字节无法读取或解码。"""


def live_bitmap_count() -> int:
    return _live_bitmaps


class Bitmap:
    """解码后的图像句柄。width/height 为源图像素尺寸，image 可能已按上限缩小。"""

    def __init__(self, image: QImage, width: int, height: int) -> None:
        global _live_bitmaps
        self._image: QImage | None = image
        self.width = width
        self.height = height
        self._disposed = False
        _live_bitmaps += 1

    @property
    def image(self) -> QImage | None:
        return self._image

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        global _live_bitmaps
        if self._disposed:
            return
        self._disposed = True
        self._image = None
        _live_bitmaps -= 1

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "live"
        return f"Bitmap({self.width}x{self.height}, {state})"


def probe_svg_support() -> bool:
    """当前 Qt 绑定是否带 QtSvg 模块。"""
    try:
        if _QT_API == "PyQt6":
            from PyQt6.QtSvg import QSvgRenderer  # noqa: F401
        else:
            from PyQt5.QtSvg import QSvgRenderer  # noqa: F401
    except ImportError:
        return False
    return True


def _decode_raster(data: bytes, max_edge: int) -> tuple[QImage, int, int]:
    with Image.open(_io.BytesIO(data)) as src:
        src.load()
        img = ImageOps.exif_transpose(src)
    width, height = img.size
    if width <= 0 or height <= 0:
        raise DecodeError(f"empty image {width}x{height}")
    img.thumbnail((max_edge, max_edge), Image.LANCZOS)
    if img.mode in ("P", "PA"):
        img = img.convert("RGBA")
    if img.mode in ("RGBA", "LA"):
        bg = Image.new("RGB", img.size, TILE_BACKGROUND)
        bg.paste(img.convert("RGB"), mask=img.split()[-1])
        img = bg
    elif img.mode != "RGB":
        img = img.convert("RGB")
    w, h = img.size
    raw = img.tobytes("raw", "RGB")
    qimg = QImage(raw, w, h, w * 3, _QImageRGB888)
    return qimg.copy(), width, height


def _decode_svg(data: bytes, max_edge: int) -> tuple[QImage, int, int]:
    if _QT_API == "PyQt6":
        from PyQt6.QtSvg import QSvgRenderer
    else:
        from PyQt5.QtSvg import QSvgRenderer

    renderer = QSvgRenderer(QByteArray(data))
    if not renderer.isValid():
        raise DecodeError("invalid SVG document")
    size = renderer.defaultSize()
    width, height = float(size.width()), float(size.height())
    if width <= 0.0 or height <= 0.0:
        view_box = renderer.viewBoxF()
        width, height = view_box.width(), view_box.height()
    if width <= 0.0 or height <= 0.0:
        raise DecodeError("SVG has no intrinsic size")

    scale = min(1.0, max_edge / max(width, height))
    target_w = max(1, int(round(width * scale)))
    target_h = max(1, int(round(height * scale)))
    target = QImage(target_w, target_h, _QImageRGB32)
    target.fill(QColor(*TILE_BACKGROUND))
    painter = QPainter(target)
    if not painter.isActive():
        raise DecodeError("cannot paint SVG")
    try:
        painter.setRenderHint(_PainterAntialiasing, True)
        painter.setRenderHint(_PainterSmoothPixmap, True)
        renderer.render(painter, QRectF(0, 0, target_w, target_h))
    finally:
        painter.end()
    return target, int(round(width)), int(round(height))


class ImageDecoder:
    """按扩展名选择解码路径；SVG 能力在构造时探测一次并在生命周期内保持不变。"""

    def __init__(self, max_edge: int = 512, svg_supported: bool | None = None) -> None:
        self._max_edge = max(1, int(max_edge))
        self._svg_supported = probe_svg_support() if svg_supported is None else bool(svg_supported)
        if not self._svg_supported:
            _log.info("[ImageDecoder] QtSvg unavailable, svg resources will be skipped")

    @property
    def svg_supported(self) -> bool:
        return self._svg_supported

    def can_decode(self, resource) -> bool:
        if resource.extension.lower() in VECTOR_EXTENSIONS:
            return self._svg_supported
        return True

    def decode(self, resource) -> Bitmap:
        """同步读取并解码资源；流总会被关闭。失败抛出 DecodeError。"""
        ext = resource.extension.lower()
        try:
            stream = resource.open_stream()
            if stream is None:
                raise DecodeError(f"no content for {resource.name!r}")
            with stream:
                data = stream.read()
            if ext in VECTOR_EXTENSIONS:
                if not self._svg_supported:
                    raise DecodeError("svg decoding is not supported")
                image, width, height = _decode_svg(data, self._max_edge)
            else:
                image, width, height = _decode_raster(data, self._max_edge)
        except DecodeError:
            raise
        except Exception as exc:
            raise DecodeError(f"cannot decode {resource.name!r}: {exc}") from exc
        return Bitmap(image, width, height)
