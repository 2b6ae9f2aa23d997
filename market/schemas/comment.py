# market/schemas/comment.py
from datetime import datetime
from typing import Optional

from .base import BaseSchema


# 누락 필드는 라우터에서 400으로 처리하므로 전부 Optional
class CommentCreateIn(BaseSchema):
    content: Optional[str] = None
    user_email: Optional[str] = None
    topic_id: Optional[str] = None


class CommentUpdateIn(BaseSchema):
    content: Optional[str] = None


class CommentOut(BaseSchema):
    id: str
    content: str
    user_email: str
    topic_id: str
    created_at: datetime
    updated_at: datetime
