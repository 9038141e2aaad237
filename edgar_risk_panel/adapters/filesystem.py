"""
Filesystem Cache Adapter

Implements DocumentRepository port using local filesystem.
Layout: {raw_dir}/{cik}/{accession-no-dashes}/{primary-document}
"""
import asyncio
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from ..core.ports import DocumentRepository, DocumentSource
from .edgar import accession_no_dashes, archive_url

logger = logging.getLogger(__name__)

# Characters no common filesystem accepts in a file name
INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_filename(filename: str) -> str:
    return INVALID_FILENAME_CHARS.sub("_", filename)


def _write_atomic(path: Path, content: bytes) -> None:
    """Write to a temp file beside path, then rename over it"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise


class FilesystemDocumentCache(DocumentRepository):
    """Raw primary-document cache; a document is downloaded at most once"""

    def __init__(self, raw_dir: str | Path, source: DocumentSource, overwrite: bool = False):
        self.raw_dir = Path(raw_dir)
        self.source = source
        self.overwrite = overwrite
        self._locks: dict[Path, asyncio.Lock] = {}
        self._lock_users: dict[Path, int] = {}

    def path_for(self, cik: str, accession_number: str, filename: str) -> Path:
        """Get path for cached document"""
        return self.raw_dir / cik / accession_no_dashes(accession_number) / sanitize_filename(filename)

    def exists(self, cik: str, accession_number: str, filename: str) -> bool:
        """Check if document is cached"""
        return self.path_for(cik, accession_number, filename).is_file()

    async def get_or_fetch(
        self,
        cik: str,
        accession_number: str,
        filename: str,
        overwrite: Optional[bool] = None
    ) -> Path:
        """
        Return the local path of a filing's primary document.

        Downloads on a miss (or when overwrite is set). A failed or cancelled
        download leaves nothing behind at the target path.
        """
        for name, value in (("cik", cik), ("accession_number", accession_number), ("filename", filename)):
            if not value or not value.strip():
                raise ValueError(f"{name} is required")

        overwrite = self.overwrite if overwrite is None else overwrite
        path = self.path_for(cik, accession_number, filename)

        lock = self._locks.setdefault(path, asyncio.Lock())
        self._lock_users[path] = self._lock_users.get(path, 0) + 1
        try:
            async with lock:
                if path.is_file() and not overwrite:
                    logger.debug(f"Cache hit {path}")
                    return path

                url = archive_url(cik, accession_number, filename)
                content = await self.source.fetch(url)
                # No await past this point: a cancelled task never reaches the write,
                # and a write that starts always completes
                _write_atomic(path, content)
                logger.info(f"Cached {url} → {path} ({len(content):,} bytes)")
                return path
        finally:
            # Drop the lock once nobody holds or waits for it
            self._lock_users[path] -= 1
            if not self._lock_users[path]:
                del self._lock_users[path]
                del self._locks[path]

    def list_all(self, cik: Optional[str] = None) -> list[Path]:
        """List cached documents, optionally for one CIK"""
        if not self.raw_dir.exists():
            return []

        paths = []
        for cik_dir in sorted(self.raw_dir.iterdir()):
            if not cik_dir.is_dir() or (cik and cik_dir.name != cik):
                continue
            for accession_dir in sorted(cik_dir.iterdir()):
                if not accession_dir.is_dir():
                    continue
                paths.extend(
                    p for p in sorted(accession_dir.iterdir())
                    if p.is_file() and not p.name.endswith(".part")
                )
        return paths

    def get_disk_usage(self) -> int:
        """Get total disk usage in bytes"""
        return sum(p.stat().st_size for p in self.list_all())
