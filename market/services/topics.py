# market/services/topics.py
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from market.core.errors import NotFound, ValidationFailed
from market.models.topic import Topic
from market.services.uploads import ImageStore, ImageUpload
from market.services.validation import is_blank, parse_id, parse_price, require_text
from market.utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_MESSAGE = "title, description, price, image and userEmail are required"


def _commit_or_discard(db: Session, store: ImageStore, written: Optional[str]) -> None:
    # 파일은 이미 기록됨 -> DB 실패 시 보상 삭제
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        if written:
            store.remove(written)
        raise


def create_topic(
    db: Session,
    store: ImageStore,
    title: Optional[str],
    description: Optional[str],
    price: Optional[str],
    image: Optional[ImageUpload],
    user_email: Optional[str],
    category: Optional[str] = None,
) -> Topic:
    if (
        is_blank(title)
        or is_blank(description)
        or is_blank(price)
        or is_blank(user_email)
        or image is None
        or not image.data
    ):
        raise ValidationFailed(REQUIRED_MESSAGE, code="MISSING_FIELDS")

    parsed_price = parse_price(price)
    store.validate(image.content_type, image.data)

    image_path = store.save(image.filename, image.data)
    topic = Topic(
        title=title.strip(),
        description=description.strip(),
        price=parsed_price,
        image=image_path,
        user_email=user_email.strip(),
        category=None if is_blank(category) else category.strip(),
    )
    db.add(topic)
    _commit_or_discard(db, store, image_path)
    db.refresh(topic)
    logger.info("Created topic %s by %s", topic.id, topic.user_email)
    return topic


def list_topics(db: Session) -> List[Topic]:
    return db.execute(select(Topic).order_by(desc(Topic.created_at))).scalars().all()


def get_topic(db: Session, topic_id: str) -> Topic:
    topic = db.get(Topic, parse_id(topic_id))
    if not topic:
        raise NotFound("Topic not found", code="TOPIC_NOT_FOUND")
    return topic


def update_topic(
    db: Session,
    store: ImageStore,
    topic_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    price: Optional[str] = None,
    category: Optional[str] = None,
    new_image: Optional[ImageUpload] = None,
    old_image: Optional[str] = None,
) -> Topic:
    """Sparse update: only the provided fields change.

    A new image is written under a fresh name before the commit; the previous
    file is removed only after the commit succeeds. ``old_image`` is honored
    only when it names the topic's current image.
    """
    topic = get_topic(db, topic_id)

    changes = {}
    if title is not None:
        changes["title"] = require_text(title, "title")
    if description is not None:
        changes["description"] = require_text(description, "description")
    if price is not None:
        changes["price"] = parse_price(price)
    if category is not None:
        changes["category"] = None if is_blank(category) else category.strip()

    previous = topic.image
    if old_image and previous and store.resolve(old_image) != store.resolve(previous):
        logger.warning("Ignoring oldImage %s for topic %s: not its current image", old_image, topic.id)

    new_path = None
    if new_image is not None:
        store.validate(new_image.content_type, new_image.data)
        new_path = store.save(new_image.filename, new_image.data)
        changes["image"] = new_path

    for k, v in changes.items():
        setattr(topic, k, v)

    _commit_or_discard(db, store, new_path)
    db.refresh(topic)

    if new_path and previous and previous != new_path:
        store.remove(previous)

    logger.info("Updated topic %s (%s)", topic.id, ", ".join(sorted(changes)) or "no changes")
    return topic


def delete_topic(db: Session, store: ImageStore, topic_id: Optional[str]) -> str:
    if is_blank(topic_id):
        raise ValidationFailed("ID is required", code="ID_REQUIRED")

    topic = get_topic(db, topic_id)
    tid, image = topic.id, topic.image

    db.delete(topic)
    db.commit()

    # 레코드 삭제 후 이미지 정리 (실패해도 요청은 성공)
    store.remove(image)
    logger.info("Deleted topic %s", tid)
    return tid
