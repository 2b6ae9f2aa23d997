# market/client/api.py
"""HTTP client for the marketplace API."""
from typing import Any, Dict, List, Optional, Tuple

import httpx

from market.utils.logger import get_logger

logger = get_logger(__name__)

# (파일명, 바이트, MIME 타입)
FileTuple = Tuple[str, bytes, str]


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class MarketClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "MarketClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> Any:
        res = self.http.request(method, url, **kwargs)
        if res.status_code >= 400:
            try:
                message = res.json().get("message") or res.text
            except ValueError:
                message = res.text
            logger.debug("%s %s -> %s %s", method, url, res.status_code, message)
            raise ApiError(res.status_code, message)
        return res.json()

    # ---------- topics ----------
    def list_topics(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/topics")["topics"]

    def get_topic(self, topic_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/topics/{topic_id}")

    def create_topic(
        self,
        title: str,
        description: str,
        price,
        image: FileTuple,
        user_email: str,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = {
            "title": title,
            "description": description,
            "price": str(price),
            "userEmail": user_email,
        }
        if category is not None:
            data["category"] = category
        body = self._request("POST", "/api/topics", data=data, files={"image": image})
        return body["newTopic"]

    def update_topic(
        self,
        topic_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        price=None,
        category: Optional[str] = None,
        new_image: Optional[FileTuple] = None,
        old_image: Optional[str] = None,
    ) -> Dict[str, Any]:
        fields = {
            "title": title,
            "description": description,
            "price": None if price is None else str(price),
            "category": category,
            "oldImage": old_image,
        }
        data = {k: v for k, v in fields.items() if v is not None}
        files = {"newImage": new_image} if new_image else None
        return self._request("PUT", f"/api/topics/{topic_id}", data=data, files=files)

    def delete_topic(self, topic_id: str) -> Dict[str, Any]:
        return self._request("DELETE", "/api/topics", params={"id": topic_id})

    # ---------- comments ----------
    def list_comments(self, topic_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/comments", params={"topicId": topic_id})

    def create_comment(self, content: str, user_email: Optional[str], topic_id: str) -> Dict[str, Any]:
        payload = {"content": content, "userEmail": user_email, "topicId": topic_id}
        return self._request("POST", "/api/comments", json=payload)

    def update_comment(self, comment_id: str, content: str) -> Dict[str, Any]:
        return self._request("PUT", f"/api/comments/{comment_id}", json={"content": content})

    def delete_comment(self, comment_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/comments/{comment_id}")
