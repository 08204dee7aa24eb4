"""
Pytest configuration and fixtures for the test suite.

GUI tests run on the offscreen Qt platform; fixture images are written with Pillow.
"""
import io
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PIL import Image

from image_gallery.resources import StorageResource

SVG_TEXT = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="20" height="10">'
    '<rect width="20" height="10" fill="red"/></svg>'
)


def write_image(path, size=(10, 8), color=(200, 30, 30)):
    """Write a small RGB image; format follows the file extension."""
    Image.new("RGB", size, color).save(str(path))
    return path


class MemoryResource(StorageResource):
    """Virtual resource backed by bytes, optionally failing on read."""

    def __init__(self, name, data=b"", *, fail_with=None):
        self._name = name
        self._data = data
        self._fail_with = fail_with
        self.closed_streams = 0

    @property
    def name(self):
        return self._name

    @property
    def full_path(self):
        return f"memory:/{self._name}"

    def open_stream(self):
        owner = self
        fail_with = self._fail_with

        class _Stream(io.BytesIO):
            def read(self, *args):
                if fail_with is not None:
                    raise fail_with
                return super().read(*args)

            def close(self):
                if not self.closed:
                    owner.closed_streams += 1
                super().close()

        return _Stream(self._data)


def png_bytes(size=(6, 4), mode="RGB", color=(0, 128, 255)):
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def image_folder(tmp_path):
    """Folder with a.png, B.TXT, b.PNG and c.svg."""
    folder = tmp_path / "icons"
    folder.mkdir()
    write_image(folder / "a.png", size=(10, 8))
    (folder / "B.TXT").write_text("not an image")
    write_image(folder / "b.PNG", size=(12, 6))
    (folder / "c.svg").write_text(SVG_TEXT)
    return folder
