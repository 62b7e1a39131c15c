from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from . import Base

class Comment(Base):
    """A post. Threads have no op; replies point op at their thread."""
    __tablename__ = 'comments'
    id = Column(Integer, primary_key=True, index=True)
    alias = Column(String(100), nullable=True)
    sub = Column(Text, nullable=True)
    com = Column(Text, nullable=True)
    op = Column(Integer, ForeignKey('comments.id'), nullable=True, index=True)
    # media attachment: all set together at ingestion, or all null
    file_name = Column(String, nullable=True)
    media_name = Column(String, nullable=True)
    media_size = Column(Integer, nullable=True)
    media_ext = Column(String(10), nullable=True)
    media_desc = Column(String(100), nullable=True)
    thumb_name = Column(String, nullable=True)
    thumb_size = Column(Integer, nullable=True)
    board = Column(String(5), ForeignKey('boards.code'), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_thread(self) -> bool:
        return self.op is None
