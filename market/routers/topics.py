from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from sqlalchemy.orm import Session

from market.core.db import get_db
from market.schemas.common import MessageOut
from market.schemas.topic import TopicCreatedOut, TopicListOut, TopicOut
from market.services import topics as topic_service
from market.services.uploads import ImageStore, ImageUpload, get_image_store

router = APIRouter(prefix="/api/topics", tags=["topics"])


# ---------- helpers ----------
def read_upload(file: Optional[UploadFile], max_bytes: int) -> Optional[ImageUpload]:
    if file is None or not file.filename:
        return None
    # 상한 + 1 바이트까지만 읽음 -> 초과 여부는 ImageStore.validate에서 판단
    data = file.file.read(max_bytes + 1)
    return ImageUpload(filename=file.filename, content_type=file.content_type, data=data)


# ---------- 1) 상품 등록 ----------
@router.post("", response_model=TopicCreatedOut, status_code=status.HTTP_201_CREATED)
def create_topic(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_email: Optional[str] = Form(None, alias="userEmail"),
    category: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    store: ImageStore = Depends(get_image_store),
):
    topic = topic_service.create_topic(
        db,
        store,
        title=title,
        description=description,
        price=price,
        image=read_upload(image, store.max_bytes),
        user_email=user_email,
        category=category,
    )
    return TopicCreatedOut(message="Topic created successfully", new_topic=TopicOut.model_validate(topic))


# ---------- 2) 전체 목록 (최신순) ----------
@router.get("", response_model=TopicListOut)
def list_topics(db: Session = Depends(get_db)):
    rows = topic_service.list_topics(db)
    return TopicListOut(topics=[TopicOut.model_validate(t) for t in rows])


# ---------- 3) 삭제 (id는 쿼리 파라미터) ----------
@router.delete("", response_model=MessageOut)
def delete_topic(
    topic_id: Optional[str] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    store: ImageStore = Depends(get_image_store),
):
    topic_service.delete_topic(db, store, topic_id)
    return MessageOut(message="Topic deleted")


# ---------- 4) 상세 ----------
@router.get("/{topic_id}", response_model=TopicOut)
def get_topic(topic_id: str = Path(...), db: Session = Depends(get_db)):
    return topic_service.get_topic(db, topic_id)


# ---------- 5) 수정 ----------
@router.put("/{topic_id}", response_model=TopicOut)
def update_topic(
    topic_id: str = Path(...),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    new_image: Optional[UploadFile] = File(None, alias="newImage"),
    old_image: Optional[str] = Form(None, alias="oldImage"),
    db: Session = Depends(get_db),
    store: ImageStore = Depends(get_image_store),
):
    return topic_service.update_topic(
        db,
        store,
        topic_id,
        title=title,
        description=description,
        price=price,
        category=category,
        new_image=read_upload(new_image, store.max_bytes),
        old_image=old_image,
    )
