"""Storage directory management module."""

import logging
import os
from pathlib import Path

from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from webcam_uploads.core.constants import ERROR_LIST_FAILED, ERROR_STORE_FAILED
from webcam_uploads.core.errors import ResourceError
from webcam_uploads.core.utils import is_listable_image, public_path

logger = logging.getLogger(__name__)


def ensure_storage_dir(directory: Path) -> Path:
    """Create the storage directory if it does not exist yet.

    Any failure other than the directory already existing is fatal and
    propagates to the caller, which is expected to abort startup.
    """
    try:
        directory.mkdir()
    except FileExistsError:
        if not directory.is_dir():
            raise
    else:
        logger.info("Created storage directory %s", directory)
    return directory


class ImageStorage:
    """Flat directory of stored images; the directory listing is the index."""

    def __init__(self, directory: Path) -> None:
        """Initialize storage rooted at an existing directory."""
        self.directory = directory

    def path_for(self, name: str) -> Path:
        """Absolute path of a stored name inside the storage directory."""
        path = (self.directory / name).resolve()
        if path.parent != self.directory.resolve():
            msg = f"Refusing to resolve {name!r} outside storage directory"
            raise ValueError(msg)
        return path

    def _write(self, name: str, content: bytes) -> Path:
        path = self.path_for(name)
        # Same name within the same millisecond overwrites: last write wins.
        path.write_bytes(content)
        return path

    def _list(self) -> list[str]:
        return [name for name in os.listdir(self.directory) if is_listable_image(name)]

    async def save(self, name: str, content: bytes) -> Path:
        """Write content under name without blocking the event loop."""
        try:
            path = await run_in_threadpool(self._write, name, content)
        except (OSError, ValueError) as err:
            raise ResourceError(
                message=ERROR_STORE_FAILED,
                details={"name": name, "error": str(err)},
            ) from err
        logger.info("Stored %s (%d bytes)", name, len(content))
        return path

    async def list_images(self) -> list[str]:
        """Public paths of every listable image, in directory order."""
        try:
            names = await run_in_threadpool(self._list)
        except OSError as err:
            raise ResourceError(
                message=ERROR_LIST_FAILED,
                details={"error": str(err)},
            ) from err
        return [public_path(name) for name in names]

    def is_writable(self) -> bool:
        """Check that the storage directory still exists and accepts writes."""
        return self.directory.is_dir() and os.access(self.directory, os.W_OK)


def get_storage(request: Request) -> ImageStorage:
    """Dependency to get the storage bound to the running app."""
    return request.app.state.storage
