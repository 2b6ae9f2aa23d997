from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from market.core.db import get_db
from market.schemas.comment import CommentCreateIn, CommentOut, CommentUpdateIn
from market.schemas.common import MessageOut
from market.services import comments as comment_service

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("", response_model=List[CommentOut])
def list_comments(
    topic_id: Optional[str] = Query(None, alias="topicId"),
    db: Session = Depends(get_db),
):
    return comment_service.list_comments(db, topic_id)


@router.post("", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment(body: CommentCreateIn, db: Session = Depends(get_db)):
    return comment_service.create_comment(
        db, content=body.content, user_email=body.user_email, topic_id=body.topic_id
    )


@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(
    body: CommentUpdateIn,
    comment_id: str = Path(...),
    db: Session = Depends(get_db),
):
    return comment_service.update_comment(db, comment_id, body.content)


@router.delete("/{comment_id}", response_model=MessageOut)
def delete_comment(comment_id: str = Path(...), db: Session = Depends(get_db)):
    comment_service.delete_comment(db, comment_id)
    return MessageOut(message="Comment deleted")
