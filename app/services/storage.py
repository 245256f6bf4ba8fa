"""
Object storage for uploaded resume files.

Objects live under ``<root>/<bucket>/<key>``. Every key must start with the
caller's identity as its first path segment; any other key is refused with
``AccessDeniedError``. This mirrors the row-level ownership policy for blobs.
"""
import logging
from pathlib import Path

from app.core.config import settings
from app.core.exceptions import AccessDeniedError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


class ObjectStorage:
    def __init__(self, root: str, bucket: str):
        self.bucket = bucket
        self.base_dir = Path(root) / bucket

    def _authorize(self, identity: str, key: str) -> Path:
        segments = key.split("/")
        if len(segments) < 2 or any(s in ("", ".", "..") for s in segments):
            raise AccessDeniedError(f"Invalid object key: {key}")
        if segments[0] != str(identity):
            logger.warning(f"Storage access denied: identity {identity} on key {key}")
            raise AccessDeniedError("Cannot access objects owned by another user")
        return self.base_dir.joinpath(*segments)

    def upload(self, identity: str, key: str, data: bytes) -> str:
        path = self._authorize(identity, key)
        if path.exists():
            raise StorageError("The resource already exists")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Storage write failed for {key}: {e}")
            raise StorageError(f"Failed to store file: {e}") from e
        logger.info(f"Stored object {self.bucket}/{key} ({len(data)} bytes)")
        return key

    def exists(self, identity: str, key: str) -> bool:
        return self._authorize(identity, key).exists()

    def download(self, identity: str, key: str) -> bytes:
        path = self._authorize(identity, key)
        if not path.is_file():
            raise NotFoundError("File not found")
        return path.read_bytes()

    def remove(self, identity: str, key: str) -> bool:
        path = self._authorize(identity, key)
        if not path.exists():
            return False
        path.unlink()
        return True


def get_storage() -> ObjectStorage:
    return ObjectStorage(settings.storage_dir, settings.storage_bucket)
