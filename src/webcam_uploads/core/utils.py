"""Utility functions for naming and inspecting uploaded images."""

import io
import time

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from webcam_uploads.core.constants import (
    ERROR_INVALID_FILENAME,
    ERROR_NO_FILE,
    FILENAME_SEPARATOR,
    LISTABLE_IMAGE_EXTENSIONS,
    UPLOAD_URL_PREFIX,
    URL_UNSAFE_CHARACTERS,
    VERIFIABLE_IMAGE_FORMATS,
)
from webcam_uploads.core.errors import ClientInputError

URL_UNSAFE_TRANSLATION = str.maketrans(dict.fromkeys(URL_UNSAFE_CHARACTERS, "_"))


def current_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def sanitize_filename(original: str | None) -> str:
    """
    Reduce a client supplied filename to its base name.

    Both POSIX and Windows separators are treated as directory boundaries so
    that names like ``..\\..\\boot.ini`` cannot escape the storage directory.
    Characters that carry meaning in a URL path become ``_`` so the public
    path always leads back to the stored file.
    Returns an empty string when nothing usable remains.
    """
    if not original:
        return ""
    base = original.replace("\\", "/").rsplit("/", 1)[-1]
    base = "".join(ch for ch in base if ch.isprintable())
    base = base.translate(URL_UNSAFE_TRANSLATION)
    if base.strip(".") == "":
        return ""
    return base


def generate_stored_name(original: str | None, now_ms: int | None = None) -> str:
    """Build ``<unixMillis>-<sanitized name>`` for a new upload."""
    if not original:
        raise ClientInputError(message=ERROR_NO_FILE, details={"filename": original})
    safe_name = sanitize_filename(original)
    if not safe_name:
        raise ClientInputError(message=ERROR_INVALID_FILENAME, details={"filename": original})
    timestamp = current_millis() if now_ms is None else now_ms
    return f"{timestamp}{FILENAME_SEPARATOR}{safe_name}"


def public_path(stored_name: str) -> str:
    """Public URL path under which a stored file is served."""
    return f"{UPLOAD_URL_PREFIX}/{stored_name}"


def is_listable_image(name: str) -> bool:
    """Check the name against the listing extension allow-list."""
    return name.lower().endswith(LISTABLE_IMAGE_EXTENSIONS)


def detect_image_format(content: bytes) -> str | None:
    """Return the Pillow format name when content is a supported image."""
    try:
        with PILImage.open(io.BytesIO(content)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, OSError, SyntaxError):
        return None
    if image_format not in VERIFIABLE_IMAGE_FORMATS:
        return None
    return image_format
