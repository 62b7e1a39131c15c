"""
Multipart request decoding.

A creation request carries two named parts: `data`, UTF-8 JSON matching the
creation schema, and `media`, an optional file upload. Anything else in the
body is ignored.

The body is parsed here with python-multipart rather than through
Starlette's form handling, which silently falls back to latin-1 for text
fields and hands file-less parts over as str.
"""

import logging
import os
from dataclasses import dataclass
from typing import AsyncIterator, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from .errors import MissingDataError, ParseError, ValidationError

logger = logging.getLogger(__name__)

DATA_PART = 'data'
MEDIA_PART = 'media'

T = TypeVar('T', bound=BaseModel)


@dataclass
class Part:
    name: str
    filename: Optional[str]
    data: bytes


@dataclass
class MultipartData(Generic[T]):
    data: T
    file_name: Optional[str] = None
    file_bytes: Optional[bytes] = None

    @property
    def has_media(self) -> bool:
        return self.file_bytes is not None


class _PartCollector:
    """python-multipart callbacks that buffer every part whole."""

    def __init__(self):
        self.parts: List[Part] = []
        self._headers = {}
        self._field = b''
        self._value = b''
        self._chunks = []

    def on_part_begin(self):
        self._headers = {}
        self._chunks = []

    def on_header_field(self, data, start, end):
        self._field += data[start:end]

    def on_header_value(self, data, start, end):
        self._value += data[start:end]

    def on_header_end(self):
        self._headers[self._field.lower()] = self._value
        self._field = b''
        self._value = b''

    def on_part_data(self, data, start, end):
        self._chunks.append(bytes(data[start:end]))

    def on_part_end(self):
        _, options = parse_options_header(self._headers.get(b'content-disposition', b''))
        filename = options.get(b'filename')
        self.parts.append(Part(
            name=options.get(b'name', b'').decode('utf-8', 'replace'),
            filename=filename.decode('utf-8', 'replace') if filename is not None else None,
            data=b''.join(self._chunks),
        ))

    def callbacks(self):
        return {
            'on_part_begin': self.on_part_begin,
            'on_part_data': self.on_part_data,
            'on_part_end': self.on_part_end,
            'on_header_field': self.on_header_field,
            'on_header_value': self.on_header_value,
            'on_header_end': self.on_header_end,
        }


async def read_parts(content_type: Optional[str], stream: AsyncIterator[bytes]) -> List[Part]:
    """Buffer every part of a multipart/form-data body; the sniffer needs complete payloads."""
    mime, params = parse_options_header(content_type or '')
    boundary = params.get(b'boundary')
    if mime != b'multipart/form-data' or not boundary:
        raise ParseError(ValueError('expected a multipart/form-data body'))

    collector = _PartCollector()
    parser = MultipartParser(boundary, collector.callbacks())
    try:
        async for chunk in stream:
            if chunk:
                parser.write(chunk)
        parser.finalize()
    except MultipartParseError as e:
        raise ParseError(e) from e
    return collector.parts


def _file_stem(filename: Optional[str]) -> Optional[str]:
    # display only, never used to decide type or extension
    if not filename:
        return None
    base = os.path.basename(filename.replace('\\', '/'))
    stem, _ = os.path.splitext(base)
    return stem or base


def decode_multipart(parts: Iterable[Part], schema: Type[T]) -> MultipartData[T]:
    """Decode the `data` part into `schema` and pick up the optional `media` upload."""
    data = None
    file_name = None
    file_bytes = None

    for part in parts:
        if part.name == DATA_PART:
            try:
                data = schema.model_validate_json(part.data.decode('utf-8'))
            except (UnicodeDecodeError, SchemaError) as e:
                raise ParseError(e) from e
        elif part.name == MEDIA_PART:
            if part.filename is None:
                raise ValidationError('media', 'media must be sent as a file upload')
            # browsers send an empty file part when nothing was picked
            file_bytes = part.data or None
            file_name = _file_stem(part.filename) if file_bytes else None
        else:
            logger.debug({'msg': 'multipart_part_ignored', 'part': part.name})

    if data is None:
        raise MissingDataError()
    return MultipartData(data=data, file_name=file_name, file_bytes=file_bytes)
