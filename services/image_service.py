import base64
import binascii
import logging
import re
from pathlib import Path
from typing import Tuple, Union

from core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

IMAGE_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
}

# Filter string for QFileDialog
IMAGE_FILTER = "Images (" + " ".join(f"*{ext}" for ext in IMAGE_TYPES) + ")"

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def encode_image_file(path: Union[str, Path]) -> str:
    """
    Reads a user-selected image and turns it into an embeddable data URI.
    The bytes are not inspected; only the file extension decides the MIME type.

    Raises:
        ExternalServiceError: If the file type is unsupported or the file cannot be read.
    """
    p = Path(path)
    mime = IMAGE_TYPES.get(p.suffix.lower())
    if mime is None:
        raise ExternalServiceError(f"Unsupported image type: {p.suffix or p.name}")

    try:
        raw = p.read_bytes()
    except OSError as e:
        logger.error("Failed to read image %s: %s", p, e)
        raise ExternalServiceError(f"Could not read image: {e}") from e

    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Splits a base64 data URI into its MIME type and raw bytes.

    Raises:
        ExternalServiceError: If the URI is not a base64 data URI.
    """
    match = _DATA_URI.match(uri or "")
    if not match:
        raise ExternalServiceError("Not a base64 image data URI.")

    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ExternalServiceError(f"Corrupt image data: {e}") from e

    return match.group("mime"), data
