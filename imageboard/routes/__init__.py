from fastapi import APIRouter
from .media import router as media_router
from .posts import router as posts_router
from .boards import router as boards_router

router = APIRouter()
router.include_router(media_router, prefix='/media', tags=['media'])
router.include_router(posts_router, tags=['posts'])
# last: GET /{board_code} would shadow any single-segment path registered after it
router.include_router(boards_router, tags=['boards'])
