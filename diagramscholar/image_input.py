"""
Uploaded file -> image payload for the Gemini API.

The payload keeps the raw bytes and MIME type; the API receives them as an
inline-data part, while the UI uses the data URL to preview the diagram.
"""

import io
import re
import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional
from PIL import Image, UnidentifiedImageError

from .errors import InvalidImageError

logger = logging.getLogger(__name__)

INVALID_IMAGE_MESSAGE = "Please upload a valid image file."
DEFAULT_MIME_TYPE = "image/png"

# Formats accepted by the uploader widget
UPLOAD_EXTENSIONS = ["png", "jpg", "jpeg", "webp", "gif"]

_DATA_URL_RE = re.compile(r"^data:([^;,]+)?(?:;[^,]*)?,(.*)$", re.DOTALL)


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def base64(self) -> str:
        """Raw base64 string without the data URL prefix."""
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"

    @classmethod
    def from_data_url(cls, url: str) -> "ImagePayload":
        """Rebuilds a payload from a data URL, defaulting to PNG when the MIME type is missing."""
        match = _DATA_URL_RE.match(url.strip())
        if not match:
            raise InvalidImageError(INVALID_IMAGE_MESSAGE)
        mime_type = match.group(1) or DEFAULT_MIME_TYPE
        try:
            data = base64.b64decode(match.group(2), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidImageError(INVALID_IMAGE_MESSAGE) from exc
        return cls(data=data, mime_type=mime_type)


def load_image(data: bytes, filename: Optional[str] = None, declared_mime: Optional[str] = None,
               max_bytes: Optional[int] = None) -> ImagePayload:
    """
    Validates uploaded bytes and returns an ImagePayload.

    The declared MIME type (as reported by the browser) must be an image type
    when present. The bytes must be readable by Pillow; the detected format
    decides the MIME type sent to the model.
    """
    label = filename or "upload"
    if declared_mime and not declared_mime.startswith("image/"):
        logger.info("Rejected %s: declared type %s is not an image", label, declared_mime)
        raise InvalidImageError(INVALID_IMAGE_MESSAGE)
    if not data:
        logger.info("Rejected %s: empty file", label)
        raise InvalidImageError(INVALID_IMAGE_MESSAGE)
    if max_bytes is not None and len(data) > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise InvalidImageError(f"The image is too large. Please upload a file under {limit_mb:g} MB.")

    try:
        with Image.open(io.BytesIO(data)) as img:
            detected_mime = img.get_format_mimetype()
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        logger.info("Rejected %s: not a readable image (%s)", label, exc)
        raise InvalidImageError(INVALID_IMAGE_MESSAGE) from exc

    mime_type = detected_mime or declared_mime or DEFAULT_MIME_TYPE
    logger.debug("Loaded %s as %s (%d bytes)", label, mime_type, len(data))
    return ImagePayload(data=data, mime_type=mime_type)
