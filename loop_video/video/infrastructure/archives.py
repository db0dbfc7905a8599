"""
Archive Implementations.

Zip packaging for rendered split parts.
"""

import asyncio
import logging
import zipfile
from pathlib import Path
from typing import Sequence, Tuple

from ..domain.interfaces import Archiver


class ZipArchiver(Archiver):
    """Writes parts into a deflated zip, preserving the given order"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    async def create(self, archive_path: Path, members: Sequence[Tuple[Path, str]]) -> Path:
        return await asyncio.get_event_loop().run_in_executor(
            None, self._create_sync, archive_path, list(members)
        )

    def _create_sync(self, archive_path: Path, members: Sequence[Tuple[Path, str]]) -> Path:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        archive_path.unlink(missing_ok=True)

        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for file_path, arcname in members:
                zf.write(file_path, arcname=arcname)

        self.logger.info(f"Created archive {archive_path.name} with {len(members)} parts")
        return archive_path
