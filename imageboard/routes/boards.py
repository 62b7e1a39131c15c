from fastapi import APIRouter
from typing import List
from ..schemas.boards import CreateBoard, BoardOut
from ..schemas.comments import CommentOut, ThreadOut
from ..crud import create_board, list_boards, get_board, list_threads, list_thread_posts
from ..validation import validate_board
from ..core import BOARDS_CREATED
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get('/boards', response_model=List[BoardOut])
async def boards():
    return await list_boards()


@router.post('/create_board', response_model=BoardOut, status_code=201)
async def new_board(payload: CreateBoard):
    board = await create_board(validate_board(payload))
    BOARDS_CREATED.inc()
    logger.info({'msg': 'board_created', 'code': board.code})
    return board


@router.get('/{board_code}', response_model=List[ThreadOut])
async def threads(board_code: str):
    await get_board(board_code)
    rows = await list_threads(board_code)
    return [
        ThreadOut.model_validate(thread).model_copy(update={'replies': replies, 'images': images})
        for thread, replies, images in rows
    ]


@router.get('/{board_code}/thread/{thread_id}', response_model=List[CommentOut])
async def thread_posts(board_code: str, thread_id: int):
    return await list_thread_posts(board_code, thread_id)
