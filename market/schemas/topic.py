# market/schemas/topic.py
from datetime import datetime
from typing import List, Optional

from .base import BaseSchema


class TopicOut(BaseSchema):
    id: str
    title: str
    description: str
    price: float
    image: Optional[str] = None
    user_email: str
    category: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TopicListOut(BaseSchema):
    topics: List[TopicOut]


class TopicCreatedOut(BaseSchema):
    message: str
    new_topic: TopicOut
