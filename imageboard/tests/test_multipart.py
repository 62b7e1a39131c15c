import json

import pytest

from imageboard.errors import MissingDataError, ParseError, ValidationError
from imageboard.multipart import Part, decode_multipart, read_parts
from imageboard.schemas.comments import CreateComment, CreateThread

BOUNDARY = 'XyZboundary'
CONTENT_TYPE = f'multipart/form-data; boundary={BOUNDARY}'


def build_body(*fields) -> bytes:
    """fields are (name, filename or None, payload bytes)"""
    out = b''
    for name, filename, payload in fields:
        disposition = f'form-data; name="{name}"'
        if filename is not None:
            disposition += f'; filename="{filename}"'
        out += f'--{BOUNDARY}\r\nContent-Disposition: {disposition}\r\n'.encode()
        if filename is not None:
            out += b'Content-Type: application/octet-stream\r\n'
        out += b'\r\n' + payload + b'\r\n'
    return out + f'--{BOUNDARY}--\r\n'.encode()


async def chunked(body: bytes, size: int = 7):
    for i in range(0, len(body), size):
        yield body[i:i + size]


def test_data_and_media_are_decoded():
    media = b'\x89PNG' + b'0' * 200_000
    parsed = decode_multipart(
        [
            Part('data', None, json.dumps({'board': 'g', 'com': 'hi'}).encode()),
            Part('media', 'photos/cat.final.png', media),
        ],
        CreateThread,
    )
    assert parsed.data.board == 'g'
    assert parsed.data.com == 'hi'
    assert parsed.file_bytes == media
    assert parsed.file_name == 'cat.final'
    assert parsed.has_media


def test_media_is_optional():
    parsed = decode_multipart([Part('data', None, b'{"op": 3, "com": "x"}')], CreateComment)
    assert parsed.data.op == 3
    assert parsed.file_bytes is None
    assert parsed.file_name is None
    assert not parsed.has_media


def test_empty_media_part_counts_as_absent():
    parsed = decode_multipart(
        [Part('data', None, b'{"op": 3, "com": "x"}'), Part('media', '', b'')],
        CreateComment,
    )
    assert not parsed.has_media
    assert parsed.file_name is None


def test_media_without_filename_is_rejected():
    with pytest.raises(ValidationError) as exc:
        decode_multipart(
            [Part('data', None, b'{"op": 3}'), Part('media', None, b'\x89PNG\r\n')],
            CreateComment,
        )
    assert exc.value.field == 'media'


def test_data_part_may_arrive_as_file():
    parsed = decode_multipart([Part('data', 'data.json', b'{"op": 1}')], CreateComment)
    assert parsed.data.op == 1


def test_unknown_parts_are_ignored():
    parsed = decode_multipart(
        [Part('extra', None, b'whatever'), Part('data', None, b'{"op": 1}'), Part('file', 'a.png', b'abc')],
        CreateComment,
    )
    assert parsed.data.op == 1
    assert parsed.file_bytes is None


def test_missing_data_part():
    with pytest.raises(MissingDataError):
        decode_multipart([Part('media', 'a.png', b'abc')], CreateComment)


def test_malformed_json():
    with pytest.raises(ParseError) as exc:
        decode_multipart([Part('data', None, b'{"op": ')], CreateComment)
    assert exc.value.cause is not None


def test_payload_not_matching_schema():
    with pytest.raises(ParseError):
        decode_multipart([Part('data', None, b'{"com": "no board"}')], CreateThread)


def test_invalid_utf8():
    with pytest.raises(ParseError):
        decode_multipart([Part('data', None, b'\xff\xfe{')], CreateComment)
    # latin-1 bytes are not reinterpreted
    with pytest.raises(ParseError):
        decode_multipart([Part('data', None, b'{"op": 1, "com": "caf\xe9"}')], CreateComment)


@pytest.mark.asyncio
async def test_read_parts_across_chunks():
    body = build_body(
        ('data', None, '{"op": 1, "com": "café"}'.encode('utf-8')),
        ('media', 'cat.png', b'\x89PNG\r\n\x1a\n' + b'\x00' * 50),
    )
    parts = await read_parts(CONTENT_TYPE, chunked(body))
    assert [p.name for p in parts] == ['data', 'media']
    assert parts[0].filename is None
    assert parts[0].data == '{"op": 1, "com": "café"}'.encode('utf-8')
    assert parts[1].filename == 'cat.png'
    assert parts[1].data == b'\x89PNG\r\n\x1a\n' + b'\x00' * 50

    parsed = decode_multipart(parts, CreateComment)
    assert parsed.data.com == 'café'
    assert parsed.file_name == 'cat'


@pytest.mark.asyncio
async def test_read_parts_keeps_raw_bytes():
    body = build_body(('data', None, b'{"op": 1, "com": "caf\xe9"}'))
    parts = await read_parts(CONTENT_TYPE, chunked(body))
    assert parts[0].data == b'{"op": 1, "com": "caf\xe9"}'


@pytest.mark.asyncio
async def test_read_parts_requires_multipart():
    with pytest.raises(ParseError):
        await read_parts('application/x-www-form-urlencoded', chunked(b'data=%7B%7D'))
    with pytest.raises(ParseError):
        await read_parts('multipart/form-data', chunked(b''))
    with pytest.raises(ParseError):
        await read_parts(None, chunked(b''))
