from .models import AsyncSessionLocal
from .models.boards import Board
from .models.comments import Comment
from .errors import NotFoundError, StoreError, ValidationError
from sqlalchemy import select, func, or_, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import aliased
from functools import wraps
import logging

logger = logging.getLogger(__name__)


def store_operation(func_):
    """Turn driver/ORM failures into StoreError. Nothing is retried here."""
    @wraps(func_)
    async def wrapper(*args, **kwargs):
        try:
            return await func_(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error({'msg': 'store_error', 'operation': func_.__name__, 'error': str(e)})
            raise StoreError(func_.__name__, e) from e
    return wrapper


def _media_columns(media, file_name):
    if media is None:
        return {}
    return {
        'file_name': file_name,
        'media_name': media.media_name,
        'media_size': media.media_size,
        'media_ext': media.media_ext,
        'thumb_name': media.thumb_name,
        'thumb_size': media.thumb_size,
    }


# boards
@store_operation
async def create_board(payload):
    async with AsyncSessionLocal() as session:
        board = Board(**payload.model_dump())
        session.add(board)
        await session.commit()
        await session.refresh(board)
        return board

@store_operation
async def list_boards():
    async with AsyncSessionLocal() as session:
        res = await session.execute(select(Board).order_by(Board.code))
        return res.scalars().all()

@store_operation
async def get_board(code: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Board).where(Board.code == code))
        board = q.scalars().first()
        if not board:
            raise NotFoundError('board', code)
        return board


# posts
@store_operation
async def get_thread(thread_id: int):
    """Load a root post. Replies can only hang off threads, never off other replies."""
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Comment).where(Comment.id == thread_id))
        post = q.scalars().first()
        if not post:
            raise NotFoundError('thread', thread_id)
        if not post.is_thread:
            raise ValidationError('op', f'post {thread_id} is a reply, not a thread')
        return post

@store_operation
async def create_thread(payload, media, file_name=None):
    async with AsyncSessionLocal() as session:
        thread = Comment(
            alias=payload.alias,
            sub=payload.sub,
            com=payload.com,
            media_desc=payload.media_desc,
            board=payload.board,
            op=None,
            **_media_columns(media, file_name),
        )
        session.add(thread)
        await session.commit()
        await session.refresh(thread)
        return thread

@store_operation
async def create_reply(payload, thread, media=None, file_name=None):
    # the reply inherits its thread's board so board-scoped lookups see it
    async with AsyncSessionLocal() as session:
        reply = Comment(
            alias=payload.alias,
            com=payload.com,
            media_desc=payload.media_desc if media is not None else None,
            op=thread.id,
            board=thread.board,
            **_media_columns(media, file_name),
        )
        session.add(reply)
        await session.commit()
        await session.refresh(reply)
        return reply

@store_operation
async def list_threads(board_code: str):
    """Threads of a board with reply and image counts aggregated from their replies."""
    reply = aliased(Comment)
    async with AsyncSessionLocal() as session:
        q = (
            select(
                Comment,
                func.count(reply.id).label('replies'),
                func.count(reply.media_name).label('images'),
            )
            .outerjoin(reply, reply.op == Comment.id)
            .where(Comment.op.is_(None), Comment.board == board_code)
            .group_by(Comment.id)
            .order_by(Comment.id)
        )
        res = await session.execute(q)
        return res.all()

@store_operation
async def get_thread_counts(thread_id: int):
    async with AsyncSessionLocal() as session:
        q = select(func.count(Comment.id), func.count(Comment.media_name)).where(Comment.op == thread_id)
        res = await session.execute(q)
        replies, images = res.one()
        return replies, images

@store_operation
async def list_thread_posts(board_code: str, thread_id: int):
    """Root post first, then replies in insertion order."""
    async with AsyncSessionLocal() as session:
        q = select(Comment).where(
            Comment.board == board_code,
            or_(and_(Comment.id == thread_id, Comment.op.is_(None)), Comment.op == thread_id),
        ).order_by(Comment.id)
        res = await session.execute(q)
        return res.scalars().all()
