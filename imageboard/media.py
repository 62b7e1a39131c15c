"""
Media ingestion: sniff, thumbnail, name and store an uploaded attachment.

The stored type and extension come from the bytes alone. Client filenames
and declared content types are never consulted.
"""

import asyncio
import io
import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

import magic
from PIL import Image

from .core import MEDIA_INGESTED
from .errors import ThumbnailError, UnknownMediaTypeError
from .file_storage import FileStorage

logger = logging.getLogger(__name__)

THUMBNAIL_SIZE = (256, 256)  # "medium"
THUMBNAIL_QUALITY = 100
THUMBNAIL_SUFFIX = 't'

# sniffed MIME type -> normalized extension
MEDIA_TYPES = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
    'image/webp': 'webp',
    'image/bmp': 'bmp',
    'image/x-ms-bmp': 'bmp',
    'image/tiff': 'tif',
    'image/x-icon': 'ico',
    'image/vnd.microsoft.icon': 'ico',
    'image/avif': 'avif',
    'image/heic': 'heic',
    'image/heif': 'heif',
    'video/mp4': 'mp4',
    'video/webm': 'webm',
    'video/x-matroska': 'mkv',
    'video/quicktime': 'mov',
}


@dataclass
class MediaInfo:
    media_name: str
    media_size: int
    media_ext: str
    thumb_name: str
    thumb_size: int


def sniff_mime(data: bytes) -> Optional[str]:
    """MIME type from magic bytes, None when libmagic has nothing better than a generic guess"""
    if not data:
        return None
    mime = magic.from_buffer(data, mime=True)
    if not mime or mime == 'application/octet-stream':
        return None
    return mime


def sniff_media_type(data: bytes) -> Tuple[str, str]:
    """Return (mime, extension) for a supported media payload or raise UnknownMediaTypeError."""
    mime = sniff_mime(data)
    ext = MEDIA_TYPES.get(mime)
    if ext is None:
        raise UnknownMediaTypeError(mime)
    return mime, ext


def generate_name() -> str:
    # random, not time based: concurrent uploads must never collide
    return uuid.uuid4().hex


def make_thumbnail(data: bytes) -> bytes:
    """Fit the image into THUMBNAIL_SIZE and re-encode it as JPEG."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            if img.mode != 'RGB':
                img = img.convert('RGB')
            img.thumbnail(THUMBNAIL_SIZE, Image.Resampling.LANCZOS)
            output = io.BytesIO()
            img.save(output, format='JPEG', quality=THUMBNAIL_QUALITY)
            return output.getvalue()
    # Pillow reports some corrupt files as SyntaxError
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise ThumbnailError(e) from e


async def ingest_media(data: bytes, storage: FileStorage) -> MediaInfo:
    """
    Sniff, thumbnail and persist an uploaded file.

    Nothing is written until both the type check and the thumbnail succeed.
    If the thumbnail write fails after the original was written, the
    original stays behind as an orphan; it is logged, not removed.
    """
    mime, ext = sniff_media_type(data)
    thumb = await asyncio.to_thread(make_thumbnail, data)

    media_name = generate_name()
    thumb_name = f'{media_name}{THUMBNAIL_SUFFIX}'

    await storage.write(media_name, data)
    try:
        await storage.write(thumb_name, thumb)
    except Exception:
        logger.warning({'msg': 'orphaned_blob', 'media_name': media_name, 'reason': 'thumbnail_write_failed'})
        raise

    MEDIA_INGESTED.labels(ext=ext).inc()
    logger.info({'msg': 'media_ingested', 'media_name': media_name, 'mime': mime, 'size': len(data)})
    return MediaInfo(
        media_name=media_name,
        media_size=len(data),
        media_ext=ext,
        thumb_name=thumb_name,
        thumb_size=len(thumb),
    )
