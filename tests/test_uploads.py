# tests/test_uploads.py
import pytest

from market.core.errors import ValidationFailed
from market.services.uploads import ImageStore, sanitize_filename


@pytest.fixture
def store(tmp_path):
    return ImageStore(tmp_path / "nested" / "uploads", max_bytes=1024)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("photo.png", "photo.png"),
        ("my photo (1).png", "my_photo_1_.png"),
        ("../../secret.png", "secret.png"),
        ("C:\\Users\\me\\pic.gif", "pic.gif"),
        ("", "image"),
        (None, "image"),
        ("...", "image"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


def test_ensure_dir_is_idempotent(store):
    assert not store.directory.exists()
    store.ensure_dir()
    store.ensure_dir()
    assert store.directory.is_dir()


def test_save_creates_dir_and_returns_public_path(store, png_bytes):
    path = store.save("a.png", png_bytes)
    assert path.startswith("/uploads/")
    assert store.exists(path)
    assert store.resolve(path).read_bytes() == png_bytes


def test_validate_rejects_type_before_anything(store, png_bytes):
    with pytest.raises(ValidationFailed) as e:
        store.validate("application/pdf", png_bytes)
    assert e.value.code == "INVALID_IMAGE_TYPE"
    assert not store.directory.exists()


def test_validate_rejects_large_and_empty(store, image_factory):
    with pytest.raises(ValidationFailed) as e:
        store.validate("image/png", image_factory("PNG", (400, 400)) + b"\0" * 2048)
    assert e.value.code == "IMAGE_TOO_LARGE"

    with pytest.raises(ValidationFailed):
        store.validate("image/png", b"")


def test_validate_content_type_is_case_insensitive(store, png_bytes):
    store.validate("IMAGE/PNG", png_bytes)


def test_resolve_stays_inside_directory(store):
    assert store.resolve("/uploads/../../etc/passwd") == store.directory / "passwd"
    assert store.resolve("") is None
    assert store.resolve(None) is None


def test_remove_is_best_effort(store, png_bytes):
    path = store.save("a.png", png_bytes)
    assert store.remove(path) is True
    assert store.remove(path) is False
    assert store.remove("/uploads/never-existed.png") is False
    assert store.remove(None) is False
