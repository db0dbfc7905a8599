"""
Upload Storage Implementations.

Local file system storage for uploaded videos using aiofiles.
"""

import logging
import uuid
from pathlib import Path
from typing import AsyncIterator, Tuple

import aiofiles
import aiofiles.os

from ..domain.errors import UploadRejected
from ..domain.interfaces import AsyncReadable, UploadStorage
from ..domain.models import ByteRangePlan


class LocalUploadStorage(UploadStorage):
    """Stores uploads as ``<uuid4><original extension>`` under one directory"""

    def __init__(self, upload_dir: Path, max_file_size_bytes: int, chunk_size: int = 1024 * 1024):
        self.upload_dir = Path(upload_dir)
        self.max_file_size_bytes = max_file_size_bytes
        self.chunk_size = chunk_size
        self.logger = logging.getLogger(__name__)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    async def save(self, source: AsyncReadable, original_name: str) -> Tuple[str, Path, int]:
        """Copy an upload to disk, enforcing the size limit while streaming"""
        extension = Path(original_name).suffix
        filename = f"{uuid.uuid4()}{extension}"
        target_path = self.upload_dir / filename
        written = 0

        try:
            async with aiofiles.open(target_path, "wb") as f:
                while True:
                    chunk = await source.read(self.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_file_size_bytes:
                        limit_mb = self.max_file_size_bytes // (1024 * 1024)
                        raise UploadRejected(f"File too large. Maximum size is {limit_mb}MB.", error_code="FILE_TOO_LARGE", status_code=413)
                    await f.write(chunk)
        except BaseException:
            await self.delete(target_path)
            raise

        if written == 0:
            await self.delete(target_path)
            raise UploadRejected("Uploaded video file is empty", error_code="EMPTY_FILE")

        self.logger.info(f"Stored upload {original_name!r} as {filename} ({written} bytes)")
        return filename, target_path, written

    async def delete(self, path: Path) -> bool:
        try:
            await aiofiles.os.remove(path)
            self.logger.debug(f"Deleted {path}")
            return True
        except FileNotFoundError:
            return False

    async def iter_range(self, path: Path, plan: ByteRangePlan) -> AsyncIterator[bytes]:
        """Yield ``plan.length`` bytes starting at ``plan.start``"""
        if not plan.is_satisfiable:
            raise ValueError("Cannot stream an unsatisfiable range")

        try:
            async with aiofiles.open(path, "rb") as f:
                await f.seek(plan.start)
                remaining = plan.length

                while remaining > 0:
                    chunk = await f.read(min(self.chunk_size, remaining))
                    if not chunk:
                        break
                    remaining -= len(chunk)
                    yield chunk
        except OSError as e:
            self.logger.error(f"Error streaming {path} bytes {plan.start}-{plan.end}: {e}")
            raise
