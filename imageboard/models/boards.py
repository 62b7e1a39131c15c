from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from . import Base

class Board(Base):
    __tablename__ = 'boards'
    code = Column(String(5), primary_key=True)
    name = Column(String(100), nullable=False)
    desc = Column(String(100), nullable=False)
    max_threads = Column(Integer, nullable=False)
    max_replies = Column(Integer, nullable=False)
    max_img_replies = Column(Integer, nullable=False)
    max_sub_len = Column(Integer, nullable=False)
    max_com_len = Column(Integer, nullable=False)
    max_file_size = Column(Integer, nullable=False)
    is_nsfw = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
