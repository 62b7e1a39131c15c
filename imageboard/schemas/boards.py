from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import Optional

class CreateBoard(BaseModel):
    code: str
    name: str
    desc: str
    max_threads: int
    max_replies: int
    max_img_replies: int
    max_sub_len: int
    max_com_len: int
    max_file_size: int
    is_nsfw: bool = False

class BoardOut(BaseModel):
    code: str
    name: str
    desc: str
    max_threads: int
    max_replies: int
    max_img_replies: int
    max_sub_len: int
    max_com_len: int
    max_file_size: int
    is_nsfw: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
