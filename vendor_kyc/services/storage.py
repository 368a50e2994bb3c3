"""Local-disk document store.

Files are written under ``settings.upload_dir`` with a random name (the
original filename is kept only as metadata) and served back under
``settings.upload_url_prefix`` by the static mount in ``main.py``.
"""


import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

import aiofiles
import aiofiles.os

from vendor_kyc.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """Reference to a stored upload, as recorded on the vendor application."""

    file_name: str
    file_url: str
    path: Path


class DocumentStorage:
    def __init__(self, root: str | Path | None = None, url_prefix: str | None = None):
        self._root = Path(root or settings.upload_dir)
        self._url_prefix = (url_prefix or settings.upload_url_prefix).rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)

    async def save(self, contents: bytes, original_name: str) -> StoredFile:
        suffix = Path(original_name).suffix.lower()
        stored_name = f"{uuid.uuid4().hex}{suffix}"
        path = self._root / stored_name

        await aiofiles.os.makedirs(self._root, exist_ok=True)
        async with aiofiles.open(path, "wb") as f:
            await f.write(contents)

        logger.info("Stored %s (%d bytes) as %s", original_name, len(contents), stored_name)
        return StoredFile(
            file_name=original_name,
            file_url=f"{self._url_prefix}/{stored_name}",
            path=path,
        )

    async def discard(self, stored: StoredFile) -> None:
        """Remove a file whose record was never written."""
        try:
            await aiofiles.os.remove(stored.path)
        except FileNotFoundError:
            logger.warning("Upload %s was already gone", stored.path.name)
            return
        logger.info("Discarded orphaned upload %s", stored.path.name)


def get_document_storage() -> DocumentStorage:
    """FastAPI dependency (overridable in tests)."""
    return DocumentStorage()
