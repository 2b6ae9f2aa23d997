# market/client/views.py
"""Client-side view state for the list, dashboard and detail pages."""
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from market.client.api import ApiError, MarketClient
from market.client.recent import RecentlyViewed
from market.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_IMAGE = "/default-avatar.png"

# 네트워크 오류 + API 오류
CLIENT_ERRORS = (ApiError, httpx.HTTPError)


class TopicListView:
    def __init__(self, client: MarketClient):
        self.client = client
        self.topics: List[Dict[str, Any]] = []
        self.loading = False
        self.error: Optional[str] = None

    def load(self) -> List[Dict[str, Any]]:
        self.loading = True
        self.error = None
        try:
            self.topics = self.client.list_topics()
        except CLIENT_ERRORS as e:
            logger.error("Error loading topics: %s", e)
            self.error = "Failed to fetch topics"
            self.topics = []
        finally:
            self.loading = False
        return self.topics


class DashboardView(TopicListView):
    """My listings: all topics filtered client-side by the signed-in email."""

    def __init__(self, client: MarketClient, user_email: Optional[str]):
        super().__init__(client)
        self.user_email = user_email

    def load(self) -> List[Dict[str, Any]]:
        if not self.user_email:
            self.topics = []
            return self.topics
        topics = super().load()
        self.topics = [t for t in topics if t.get("userEmail") == self.user_email]
        return self.topics


class DetailState(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "not_found"
    LOADED = "loaded"


class ComposerMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class TopicDetailView:
    """Detail page: topic, its comments, the comment composer and image modal.

    ``load`` moves the view from LOADING to LOADED or NOT_FOUND. The composer
    is in EDIT mode while ``editing_comment_id`` is set, otherwise CREATE.
    Local comment state only changes after the server confirms.
    """

    def __init__(
        self,
        client: MarketClient,
        topic_id: str,
        user_email: Optional[str] = None,
        recent: Optional[RecentlyViewed] = None,
    ):
        self.client = client
        self.topic_id = topic_id
        self.user_email = user_email
        self.recent = recent

        self.state = DetailState.LOADING
        self.topic: Optional[Dict[str, Any]] = None
        self.comments: List[Dict[str, Any]] = []

        self.draft = ""
        self.editing_comment_id: Optional[str] = None

        self.modal_open = False
        self.modal_image: Optional[str] = None

    # ---------- loading ----------
    def load(self) -> DetailState:
        self.state = DetailState.LOADING
        self.topic = None
        self.comments = []
        try:
            self.topic = self.client.get_topic(self.topic_id)
            self.comments = self.client.list_comments(self.topic_id)
            if self.recent is not None:
                self.recent.push(self.topic)
        except CLIENT_ERRORS as e:
            logger.error("Error fetching topic %s: %s", self.topic_id, e)
        self.state = DetailState.LOADED if self.topic else DetailState.NOT_FOUND
        return self.state

    def is_owner(self, email: Optional[str] = None) -> bool:
        email = email or self.user_email
        return bool(self.topic and email and self.topic.get("userEmail") == email)

    # ---------- composer ----------
    @property
    def mode(self) -> ComposerMode:
        return ComposerMode.EDIT if self.editing_comment_id else ComposerMode.CREATE

    def start_edit(self, comment_id: str) -> bool:
        for c in self.comments:
            if c["id"] == comment_id:
                self.draft = c["content"]
                self.editing_comment_id = comment_id
                return True
        return False

    def cancel_edit(self) -> None:
        self.draft = ""
        self.editing_comment_id = None

    def submit(self) -> Optional[Dict[str, Any]]:
        if not self.draft.strip() or self.topic is None:
            return None

        try:
            if self.editing_comment_id:
                saved = self.client.update_comment(self.editing_comment_id, self.draft)
                self.comments = [saved if c["id"] == self.editing_comment_id else c for c in self.comments]
            else:
                saved = self.client.create_comment(self.draft, self.user_email, self.topic["id"])
                self.comments = [saved] + self.comments
        except CLIENT_ERRORS as e:
            logger.error("Error submitting comment: %s", e)
            return None

        self.cancel_edit()
        return saved

    def delete_comment(self, comment_id: str) -> bool:
        try:
            self.client.delete_comment(comment_id)
        except CLIENT_ERRORS as e:
            logger.error("Error deleting comment %s: %s", comment_id, e)
            return False
        self.comments = [c for c in self.comments if c["id"] != comment_id]
        if self.editing_comment_id == comment_id:
            self.cancel_edit()
        return True

    # ---------- image modal ----------
    def open_image(self, image: Optional[str] = None) -> None:
        if image is None and self.topic:
            image = self.topic.get("image")
        self.modal_image = image or DEFAULT_IMAGE
        self.modal_open = True

    def close_image(self) -> None:
        self.modal_open = False
        self.modal_image = None
