import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, String, Text
from sqlalchemy.orm import relationship

from market.core.db import Base


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Topic(Base):
    __tablename__ = "topics"

    id = Column(String(32), primary_key=True, default=new_id)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)

    # "/uploads/<파일명>" 형태의 공개 경로
    image = Column(String(500), nullable=True)

    # 외부 인증(provider)에서 받은 이메일로 소유자 식별
    user_email = Column(String(255), nullable=False, index=True)

    category = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    comments = relationship(
        "Comment",
        back_populates="topic",
        cascade="all, delete-orphan",
    )
