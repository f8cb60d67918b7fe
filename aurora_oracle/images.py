import base64
import binascii
import re


_DATA_URL_PREFIX = re.compile(r"^data:image/[a-z0-9.+-]+;base64,", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def decode_image_payload(payload: str) -> bytes:
    """Decode a base64 image, accepting a browser-style ``data:image/...;base64,`` prefix.

    Raises ValueError when the payload is empty or not valid base64.
    """
    body = _DATA_URL_PREFIX.sub("", (payload or "").strip())
    # `base64` wraps its output at 76 columns
    body = _WHITESPACE.sub("", body)
    if not body:
        raise ValueError("Image payload is empty")
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Image payload is not valid base64: {e}") from e


def sniff_mime_type(image: bytes) -> str:
    if image.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image[:4] == b"RIFF" and image[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
