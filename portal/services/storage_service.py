# /portal/services/storage_service.py

"""
A filesystem-backed object store for uploaded files.

Objects live under `<STORAGE_DIR>/<STORAGE_BUCKET>/<path>` and are served by
the static mount at `/files`, so an object's public URL is
`<PUBLIC_BASE_URL>/files/<path>`. Every failure surfaces as `StorageError`.
"""

import logging
import os
import re

from ..core.config import settings
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)

PUBLIC_MOUNT_PATH = "/files"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_name(name: str) -> str:
    """Replaces every character outside `[a-zA-Z0-9.-]` with an underscore."""
    return _UNSAFE_CHARS.sub("_", name)


class LocalObjectStorage:
    def __init__(self, root_dir: str, public_base_url: str):
        self.root_dir = os.path.abspath(root_dir)
        self.public_base_url = public_base_url.rstrip("/")

    def _absolute_path(self, path: str) -> str:
        absolute = os.path.abspath(os.path.join(self.root_dir, path))
        if os.path.commonpath([absolute, self.root_dir]) != self.root_dir:
            raise StorageError(f"Object path escapes the bucket: {path}")
        return absolute

    def upload(self, path: str, content: bytes, content_type: str = "application/octet-stream") -> str:
        """Writes the object and returns its path. Existing objects are never overwritten."""
        absolute = self._absolute_path(path)
        try:
            os.makedirs(os.path.dirname(absolute), exist_ok=True)
            with open(absolute, "xb") as buffer:
                buffer.write(content)
        except OSError as e:
            logger.error("Upload of %s (%s) failed: %s", path, content_type, e)
            raise StorageError(f"Could not store {path}") from e
        logger.info("Stored object %s (%d bytes, %s)", path, len(content), content_type)
        return path

    def exists(self, path: str) -> bool:
        return os.path.exists(self._absolute_path(path))

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}{PUBLIC_MOUNT_PATH}/{path}"

    def delete(self, path: str) -> None:
        absolute = self._absolute_path(path)
        try:
            os.remove(absolute)
        except FileNotFoundError:
            logger.warning("Object %s was already gone", path)
        except OSError as e:
            raise StorageError(f"Could not delete {path}") from e


def get_storage_root() -> str:
    return os.path.join(settings.STORAGE_DIR, settings.STORAGE_BUCKET)


def get_storage() -> LocalObjectStorage:
    """FastAPI dependency providing the configured object store."""
    return LocalObjectStorage(get_storage_root(), settings.PUBLIC_BASE_URL)
