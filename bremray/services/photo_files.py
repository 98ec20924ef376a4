"""Photo file checks before upload: size limit and image type sniffed with Pillow."""

from __future__ import annotations

import asyncio
import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from bremray.config import PhotoConfig
from bremray.errors import PhotoValidationError

PhotoPart = tuple[str, bytes, str]  # (filename, data, content_type)


def sniff_content_type(data: bytes) -> str:
    """MIME type of an image payload, e.g. ``image/jpeg``. Raises PhotoValidationError."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
    except UnidentifiedImageError as e:
        raise PhotoValidationError("File is not a recognised image") from e
    mime = Image.MIME.get(fmt or "")
    if not mime:
        raise PhotoValidationError(f"Unsupported image format: {fmt}")
    return mime


def validate_photo(filename: str, data: bytes, config: PhotoConfig) -> PhotoPart:
    if not data:
        raise PhotoValidationError(f"{filename} is empty")
    if len(data) > config.max_photo_size:
        limit_mb = config.max_photo_size / (1024 * 1024)
        raise PhotoValidationError(f"{filename} is larger than {limit_mb:g} MB")
    content_type = sniff_content_type(data)
    if content_type not in config.accepted_types:
        raise PhotoValidationError(f"{filename}: {content_type} is not an accepted image type")
    return filename, data, content_type


def _read_sync(path: str | Path, config: PhotoConfig) -> PhotoPart:
    p = Path(path)
    return validate_photo(p.name, p.read_bytes(), config)


async def read_photos(paths: list[str | Path], config: PhotoConfig) -> list[PhotoPart]:
    """Read and validate photo files off the event loop."""
    return [await asyncio.to_thread(_read_sync, p, config) for p in paths]
