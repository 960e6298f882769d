"""Local disk storage for product photos."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path, PurePosixPath
from uuid import uuid4

from catalogo.services.exceptions import PhotoStorageError


logger = logging.getLogger(__name__)

_STRIPPED_CHARS = (" ", ":", "\\")


class PhotoStorage:
    """Writes uploaded files under a single upload directory.

    The directory is shared by every request and is not locked; uniqueness of
    stored names relies on the random prefix added by ``build_filename``.
    """

    def __init__(self, upload_dir: str | Path) -> None:
        self.upload_dir = Path(upload_dir)

    @staticmethod
    def sanitize(filename: str | None) -> str:
        name = PurePosixPath(filename or "").name
        for char in _STRIPPED_CHARS:
            name = name.replace(char, "")
        return name

    def build_filename(self, original: str | None) -> str:
        name = self.sanitize(original)
        prefix = str(uuid4())
        return f"{prefix}-{name}" if name else prefix

    def path_for(self, filename: str) -> Path:
        return self.upload_dir / filename

    async def write(self, filename: str, data: bytes) -> Path:
        target = self.path_for(filename)

        def _write() -> None:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as exc:
            logger.error("Photo write failed", extra={"foto": filename, "error": str(exc)})
            raise PhotoStorageError(f"Unable to store file {filename}") from exc

        logger.info("Photo stored", extra={"foto": filename, "size": len(data)})
        return target

    async def discard(self, filename: str | None) -> bool:
        """Remove a stored photo. Missing files and disk errors are only logged."""
        if not filename:
            return False
        target = self.path_for(PurePosixPath(filename).name)
        try:
            await asyncio.to_thread(target.unlink, missing_ok=True)
        except OSError as exc:
            logger.warning("Photo removal failed", extra={"foto": filename, "error": str(exc)})
            return False
        return True

    @asynccontextmanager
    async def stage(self, original_filename: str | None, data: bytes) -> AsyncIterator[str]:
        """Write the file, then run the enclosed persistence step.

        Yields the generated filename. If the block raises, the file that was
        just written is removed before the exception propagates.
        """
        filename = self.build_filename(original_filename)
        await self.write(filename, data)
        try:
            yield filename
        except Exception:
            logger.warning("Discarding photo after failed save", extra={"foto": filename})
            await self.discard(filename)
            raise


__all__ = ["PhotoStorage"]
