from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import Optional

class CreateThread(BaseModel):
    alias: Optional[str] = None
    sub: Optional[str] = None
    com: Optional[str] = None
    media_desc: Optional[str] = None
    board: str

class CreateComment(BaseModel):
    alias: Optional[str] = None
    com: Optional[str] = None
    media_desc: Optional[str] = None
    op: int

class CommentOut(BaseModel):
    id: int
    alias: Optional[str] = None
    sub: Optional[str] = None
    com: Optional[str] = None
    op: Optional[int] = None
    board: Optional[str] = None
    file_name: Optional[str] = None
    media_name: Optional[str] = None
    media_size: Optional[int] = None
    media_ext: Optional[str] = None
    media_desc: Optional[str] = None
    thumb_name: Optional[str] = None
    thumb_size: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ThreadOut(CommentOut):
    # computed per request from the replies, never stored
    replies: int = 0
    images: int = 0
