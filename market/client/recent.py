# market/client/recent.py
"""Recently viewed topics, kept on the client side.

At most ``capacity`` snapshots, unique by id, oldest evicted first. A topic
that is already in the list is not moved.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from market.core.config import settings
from market.utils.logger import get_logger

logger = get_logger(__name__)


class RecentlyViewed:
    def __init__(self, path: Optional[Path] = None, capacity: Optional[int] = None):
        if capacity is None:
            capacity = settings.RECENT_CAPACITY
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.path = Path(path) if path else None
        self.capacity = capacity
        self._items: List[Dict[str, Any]] = self._load()

    def _load(self) -> List[Dict[str, Any]]:
        if not self.path or not self.path.is_file():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable recent list %s: %s", self.path, e)
            return []
        if not isinstance(data, list):
            return []

        items: List[Dict[str, Any]] = []
        seen = set()
        for entry in data:
            if isinstance(entry, dict) and entry.get("id") and entry["id"] not in seen:
                seen.add(entry["id"])
                items.append(entry)
        return items[-self.capacity:]

    def _save(self) -> None:
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._items, ensure_ascii=False), encoding="utf-8")

    def items(self) -> List[Dict[str, Any]]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, topic_id: str) -> bool:
        return any(item["id"] == topic_id for item in self._items)

    def push(self, snapshot: Dict[str, Any]) -> bool:
        """Record a viewed topic. Returns False if it was already recorded."""
        topic_id = snapshot.get("id")
        if not topic_id:
            raise ValueError("snapshot has no id")
        if topic_id in self:
            return False
        if len(self._items) >= self.capacity:
            self._items.pop(0)
        self._items.append(dict(snapshot))
        self._save()
        return True

    def clear(self) -> None:
        self._items = []
        self._save()
