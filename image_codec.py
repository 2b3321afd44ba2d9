import base64
import binascii
import io
import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from errors import ImageDecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageAsset:
    """An image held in memory as a ``data:`` URL, ready for <img src>."""

    data_url: str
    mime_type: str

    @property
    def raw_bytes(self):
        return split_data_url(self.data_url)[1]


def to_data_url(raw_bytes, mime_type):
    b64 = base64.b64encode(raw_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{b64}"


def split_data_url(data_url):
    """Return ``(mime_type, raw_bytes)`` for a base64 data URL."""
    try:
        header, b64 = data_url.split(",", 1)
        mime = header.split(":")[1].split(";")[0]
        raw = base64.b64decode(b64, validate=True)
    except (AttributeError, IndexError, ValueError, binascii.Error) as e:
        raise ImageDecodeError("Invalid image data") from e
    return mime, raw


def read_image_file(file_storage):
    """Turn an uploaded file into an ImageAsset, rejecting anything Pillow can't open."""
    if file_storage is None:
        raise ImageDecodeError("No image provided")

    raw = file_storage.read()
    if not raw:
        raise ImageDecodeError()

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImageDecodeError() from e

    mime = file_storage.mimetype or ""
    if not mime.startswith("image/"):
        mime = Image.MIME.get(fmt, "image/png")
    logger.info("Read %s upload (%d bytes)", mime, len(raw))
    return ImageAsset(data_url=to_data_url(raw, mime), mime_type=mime)
