"""
Helpers for embedding binary files in prediction inputs.

The API accepts files inline as data URIs: data:<mime>;base64,<payload>.
"""

import base64
import io
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

TEXT_MIME = 'text/plain; charset=utf-8'
BINARY_MIME = 'application/octet-stream'


def detect_content_type(data: bytes) -> str:
    """
    Guess the MIME type of raw bytes.

    Images are identified by Pillow from their header. Anything else is
    reported as UTF-8 text if it decodes as such, and as
    application/octet-stream otherwise. Never fails.

    Args:
        data: Raw file contents

    Returns:
        MIME type string
    """
    if data:
        try:
            with Image.open(io.BytesIO(data)) as image:
                mime = Image.MIME.get(image.format or '')
            if mime:
                return mime
        except (UnidentifiedImageError, OSError, ValueError):
            pass

    try:
        data.decode('utf-8')
    except UnicodeDecodeError:
        return BINARY_MIME
    return TEXT_MIME


def encode_image(image: bytes) -> str:
    """
    Encode raw bytes into the data URI format accepted by the API.

    Args:
        image: Raw file contents

    Returns:
        'data:<mime>;base64,<payload>'

    Raises:
        TypeError: If image is not bytes-like
    """
    if not isinstance(image, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected bytes, got {type(image).__name__}")

    raw = bytes(image)
    encoded = base64.b64encode(raw).decode('ascii')
    return f"data:{detect_content_type(raw)};base64,{encoded}"


def encode_file(path: Union[str, Path]) -> str:
    """Read a file from disk and encode it with encode_image."""
    return encode_image(Path(path).read_bytes())
