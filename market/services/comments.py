# market/services/comments.py
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from market.core.errors import NotFound, ValidationFailed
from market.models.comment import Comment
from market.models.topic import Topic
from market.services.validation import is_blank, parse_id, require_text
from market.utils.logger import get_logger

logger = get_logger(__name__)


def create_comment(
    db: Session,
    content: Optional[str],
    user_email: Optional[str],
    topic_id: Optional[str],
) -> Comment:
    if is_blank(content) or is_blank(user_email) or is_blank(topic_id):
        raise ValidationFailed("Missing required fields", code="MISSING_FIELDS")

    tid = parse_id(topic_id)
    if db.get(Topic, tid) is None:
        raise NotFound("Topic not found", code="TOPIC_NOT_FOUND")

    c = Comment(content=content.strip(), user_email=user_email.strip(), topic_id=tid)
    db.add(c)
    db.commit()
    db.refresh(c)
    logger.info("Created comment %s on topic %s", c.id, tid)
    return c


def list_comments(db: Session, topic_id: Optional[str]) -> List[Comment]:
    if is_blank(topic_id):
        raise ValidationFailed("Topic ID is required", code="TOPIC_ID_REQUIRED")

    q = (
        select(Comment)
        .where(Comment.topic_id == parse_id(topic_id))
        .order_by(desc(Comment.created_at))
    )
    return db.execute(q).scalars().all()


def get_comment(db: Session, comment_id: str) -> Comment:
    c = db.get(Comment, parse_id(comment_id))
    if not c:
        raise NotFound("Comment not found", code="COMMENT_NOT_FOUND")
    return c


def update_comment(db: Session, comment_id: str, content: Optional[str]) -> Comment:
    c = get_comment(db, comment_id)
    c.content = require_text(content, "content")
    db.commit()
    db.refresh(c)
    logger.info("Updated comment %s", c.id)
    return c


def delete_comment(db: Session, comment_id: str) -> str:
    c = get_comment(db, comment_id)
    cid = c.id
    db.delete(c)
    db.commit()
    logger.info("Deleted comment %s", cid)
    return cid
