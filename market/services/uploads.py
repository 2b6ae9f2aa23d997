# market/services/uploads.py
"""Local-disk storage for listing images.

Images land in ``UPLOAD_DIR`` under a collision-resistant name
(``<uuid4 hex>-<original name>``) and are referenced by their public path
``<UPLOAD_URL_PREFIX>/<name>``, which the app serves as static files.
"""
import re
import threading
import uuid
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Iterable, Optional

from fastapi import Depends
from PIL import Image, UnidentifiedImageError

from market.core.config import Settings, get_settings
from market.core.errors import StorageError, ValidationFailed
from market.utils.logger import get_logger

logger = get_logger(__name__)

_dir_lock = threading.Lock()
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
MAX_NAME_LENGTH = 100


def sanitize_filename(filename: Optional[str]) -> str:
    # 경로 구분자 제거 후 안전한 문자만 남김
    name = Path((filename or "").replace("\\", "/")).name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    if not name:
        name = "image"
    return name[-MAX_NAME_LENGTH:]


@dataclass
class ImageUpload:
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes


class ImageStore:
    def __init__(
        self,
        directory: Path,
        url_prefix: str = "/uploads",
        allowed_types: Iterable[str] = ("image/jpeg", "image/jpg", "image/png", "image/gif"),
        max_bytes: int = 10 * 1024 * 1024,
    ):
        self.directory = Path(directory)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.allowed_types = {t.lower() for t in allowed_types}
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageStore":
        return cls(
            directory=Path(settings.UPLOAD_DIR),
            url_prefix=settings.UPLOAD_URL_PREFIX,
            allowed_types=settings.ALLOWED_IMAGE_TYPES,
            max_bytes=settings.max_upload_size_bytes,
        )

    def ensure_dir(self) -> Path:
        if not self.directory.is_dir():
            with _dir_lock:
                self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def check_content_type(self, content_type: Optional[str]) -> None:
        if (content_type or "").lower() not in self.allowed_types:
            raise ValidationFailed("Image type is not allowed", code="INVALID_IMAGE_TYPE")

    def validate(self, content_type: Optional[str], data: bytes) -> None:
        """Reject anything that is not an allowed, decodable image. Writes nothing."""
        self.check_content_type(content_type)
        if not data:
            raise ValidationFailed("Image is empty", code="INVALID_IMAGE")
        if len(data) > self.max_bytes:
            raise ValidationFailed(
                f"Image exceeds {self.max_bytes // (1024 * 1024)}MB",
                code="IMAGE_TOO_LARGE",
            )
        try:
            with Image.open(BytesIO(data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
            raise ValidationFailed("Uploaded file is not a valid image", code="INVALID_IMAGE")

    def unique_name(self, filename: Optional[str]) -> str:
        return f"{uuid.uuid4().hex}-{sanitize_filename(filename)}"

    def public_path(self, name: str) -> str:
        return f"{self.url_prefix}/{name}"

    def save(self, filename: Optional[str], data: bytes) -> str:
        """Write ``data`` under a fresh unique name and return its public path."""
        name = self.unique_name(filename)
        target = self.ensure_dir() / name
        try:
            # "x" 모드: 동일 이름이 있으면 덮어쓰지 않고 실패
            with open(target, "xb") as fh:
                fh.write(data)
        except OSError as e:
            logger.error("Failed writing upload %s: %s", target, e)
            raise StorageError() from e
        logger.info("Stored image %s (%d bytes)", name, len(data))
        return self.public_path(name)

    def resolve(self, path: Optional[str]) -> Optional[Path]:
        """Map a public path or bare file name to a file inside the upload directory."""
        if not path:
            return None
        name = Path(path.replace("\\", "/")).name
        if not name or name in (".", ".."):
            return None
        return self.directory / name

    def exists(self, path: Optional[str]) -> bool:
        target = self.resolve(path)
        return bool(target and target.is_file())

    def remove(self, path: Optional[str]) -> bool:
        """Best-effort delete. Missing files are not an error."""
        target = self.resolve(path)
        if target is None or not target.is_file():
            return False
        try:
            target.unlink()
        except OSError as e:
            logger.warning("Could not remove image %s: %s", target, e)
            return False
        logger.info("Removed image %s", target.name)
        return True


def get_image_store(settings: Settings = Depends(get_settings)) -> ImageStore:
    return ImageStore.from_settings(settings)
