# realty/services/storage.py
"""
Object store for uploaded media, backed by the static directory.

Objects are addressed by key ``<folder>/<ms timestamp>-<hex><ext>`` and
served under ``/static/<UPLOAD_SUBDIR>/<key>``.
"""
import os
import secrets
import time
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional
from urllib.parse import urlsplit

from realty.core.config import settings
from realty.core.errors import ValidationFailedError
from realty.core.logging import get_logger

logger = get_logger("realty.storage")

ALLOWED_MIME_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "video/mp4",
    "video/mpeg",
    "video/quicktime",
    "application/pdf",
)

_CHUNK = 1024 * 1024


def folder_for(content_type: str) -> str:
    if content_type.startswith("image/"):
        return "images"
    if content_type.startswith("video/"):
        return "videos"
    if content_type == "application/pdf":
        return "documents"
    return "uploads"


def make_key(filename: Optional[str], content_type: str) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    stamp = int(time.time() * 1000)
    return f"{folder_for(content_type)}/{stamp}-{secrets.token_hex(16)}{ext}"


class LocalObjectStore:
    def __init__(
        self,
        root: Path,
        base_url: str,
        url_prefix: str,
        max_bytes: int = 10 * 1024 * 1024,
    ):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.url_prefix = "/" + url_prefix.strip("/") + "/"
        self.max_bytes = max_bytes

    def url_for(self, key: str) -> str:
        return f"{self.base_url}{self.url_prefix}{key}"

    def key_for_url(self, url: str) -> Optional[str]:
        """Map a public URL back to its key; None for URLs this store never issued."""
        path = urlsplit(url).path
        if not path.startswith(self.url_prefix):
            return None
        key = path[len(self.url_prefix):]
        if not key or key.startswith("/") or "\\" in key or ".." in key.split("/"):
            return None
        if not (self.root / key).resolve().is_relative_to(self.root.resolve()):
            return None
        return key

    def _path(self, key: str) -> Path:
        path = self.root / key
        if not path.resolve().is_relative_to(self.root.resolve()):
            raise ValidationFailedError("Invalid file key", {"key": key})
        return path

    def put(self, stream: BinaryIO, *, filename: Optional[str], content_type: Optional[str]) -> Dict[str, Any]:
        content_type = (content_type or "").lower()
        if content_type not in ALLOWED_MIME_TYPES:
            raise ValidationFailedError(
                "Invalid file type. Only images, videos, and PDFs are allowed.",
                {"mimetype": content_type, "file": filename},
            )

        key = make_key(filename, content_type)
        dest = self._path(key)
        dest.parent.mkdir(parents=True, exist_ok=True)

        size = 0
        with dest.open("wb") as f:
            while True:
                chunk = stream.read(_CHUNK)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_bytes:
                    break
                f.write(chunk)
        if size > self.max_bytes:
            dest.unlink(missing_ok=True)
            raise ValidationFailedError(
                "File too large",
                {"file": filename, "max_bytes": self.max_bytes},
            )

        logger.info("stored %s (%s, %d bytes)", key, content_type, size)
        return {
            "url": self.url_for(key),
            "key": key,
            "originalName": filename,
            "mimetype": content_type,
            "size": size,
        }

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.is_file():
            return False
        path.unlink()
        logger.info("deleted %s", key)
        return True

    def delete_urls(self, urls: List[str]) -> List[str]:
        """Delete what can be resolved; returns the keys actually removed."""
        deleted = []
        for url in urls:
            key = self.key_for_url(url)
            if key and self.delete(key):
                deleted.append(key)
        return deleted


def get_store() -> LocalObjectStore:
    return LocalObjectStore(
        root=Path(settings.STATIC_DIR) / settings.UPLOAD_SUBDIR,
        base_url=settings.MEDIA_BASE_URL,
        url_prefix=f"/static/{settings.UPLOAD_SUBDIR}",
        max_bytes=settings.MAX_UPLOAD_BYTES,
    )
