from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from market.core.db import Base
from market.models.topic import new_id, utcnow


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(32), primary_key=True, default=new_id)

    content = Column(Text, nullable=False)
    user_email = Column(String(255), nullable=False)

    topic_id = Column(String(32), ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    topic = relationship("Topic", back_populates="comments")
