"""
Thread and reply creation.

Both endpoints take a multipart body: a `data` part with the JSON payload
and a `media` part with the attachment. The pipeline is
decode -> validate/render -> board checks -> ingest media -> insert row.
Everything up to the ingest step is side-effect free.
"""

import logging
from fastapi import APIRouter, Depends, Request
from ..schemas.comments import CreateThread, CreateComment, CommentOut
from ..crud import get_board, get_thread, get_thread_counts, create_thread, create_reply
from ..multipart import read_parts, decode_multipart
from ..validation import validate_thread, validate_comment, check_board_limits, check_reply_limits
from ..media import ingest_media
from ..file_storage import FileStorage, get_storage
from ..errors import StoreError, ValidationError
from ..core import POSTS_CREATED

logger = logging.getLogger(__name__)

router = APIRouter()


async def _insert(insert, media, *args, **kwargs):
    # no transaction spans the blob write and the insert; a failed insert leaves the blobs behind
    try:
        return await insert(*args, **kwargs)
    except StoreError:
        if media is not None:
            logger.warning({
                'msg': 'orphaned_blob',
                'media_name': media.media_name,
                'thumb_name': media.thumb_name,
                'reason': 'insert_failed',
            })
        raise


@router.post('/create_thread', response_model=CommentOut, status_code=201)
async def new_thread(request: Request, storage: FileStorage = Depends(get_storage)):
    parts = await read_parts(request.headers.get('content-type'), request.stream())
    parsed = decode_multipart(parts, CreateThread)

    thread = validate_thread(parsed.data)
    board = await get_board(thread.board)
    if not parsed.has_media:
        raise ValidationError('media', 'an image is required to start a thread')
    check_board_limits(board, sub=parsed.data.sub, com=parsed.data.com, media_size=len(parsed.file_bytes))

    media = await ingest_media(parsed.file_bytes, storage)
    post = await _insert(create_thread, media, thread, media, parsed.file_name)

    POSTS_CREATED.labels(kind='thread').inc()
    logger.info({'msg': 'thread_created', 'id': post.id, 'board': post.board})
    return post


@router.post('/create_comment', response_model=CommentOut, status_code=201)
async def new_comment(request: Request, storage: FileStorage = Depends(get_storage)):
    parts = await read_parts(request.headers.get('content-type'), request.stream())
    parsed = decode_multipart(parts, CreateComment)

    comment = validate_comment(parsed.data, has_media=parsed.has_media)
    thread = await get_thread(comment.op)
    board = await get_board(thread.board)
    media_size = len(parsed.file_bytes) if parsed.has_media else None
    check_board_limits(board, com=parsed.data.com, media_size=media_size)
    replies, images = await get_thread_counts(thread.id)
    check_reply_limits(board, replies, images, has_media=parsed.has_media)

    media = None
    if parsed.has_media:
        media = await ingest_media(parsed.file_bytes, storage)
    post = await _insert(create_reply, media, comment, thread, media, parsed.file_name)

    POSTS_CREATED.labels(kind='reply').inc()
    logger.info({'msg': 'reply_created', 'id': post.id, 'op': post.op, 'has_media': media is not None})
    return post
