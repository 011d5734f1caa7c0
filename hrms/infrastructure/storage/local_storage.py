"""Local filesystem storage for employee documents (aiofiles, atomic writes)."""

from __future__ import annotations

import hashlib
import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any, BinaryIO

import aiofiles
import aiofiles.os

from hrms.infrastructure.exceptions import (
    StorageChecksumMismatchError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)


class LocalDocumentStorage:
    """Implements IDocumentStorage on a directory tree.

    Paths are validated against storage_root. Writes go to a temp file in
    the target directory and are renamed into place after the checksum check.
    """

    CHUNK_SIZE = 64 * 1024

    def __init__(self, storage_root: str) -> None:
        self.storage_root = Path(storage_root).resolve()

    def _full_path(self, storage_ref: str) -> Path:
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref) from e
        return full_path

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
    ) -> dict[str, Any]:
        target = self._full_path(storage_ref)
        temp_path: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            fd, temp_path = tempfile.mkstemp(dir=target.parent, prefix=".tmp_")
            os.close(fd)
            sha256 = hashlib.sha256()
            size = 0
            async with aiofiles.open(temp_path, "wb") as out:
                while chunk := file_data.read(self.CHUNK_SIZE):
                    sha256.update(chunk)
                    size += len(chunk)
                    await out.write(chunk)
            computed = sha256.hexdigest()
            if computed != expected_checksum:
                raise StorageChecksumMismatchError(storage_ref, expected_checksum, computed)
            os.chmod(temp_path, 0o640)
            os.replace(temp_path, target)
            temp_path = None
            return {
                "storage_ref": storage_ref,
                "checksum": computed,
                "size": size,
                "content_type": content_type,
            }
        except (StorageChecksumMismatchError, StoragePermissionError):
            raise
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content in CHUNK_SIZE pieces."""
        file_path = self._full_path(storage_ref)
        if not file_path.exists():
            raise StorageNotFoundError(storage_ref)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while chunk := await f.read(self.CHUNK_SIZE):
                    yield chunk
        except OSError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def exists(self, storage_ref: str) -> bool:
        return self._full_path(storage_ref).is_file()

    async def delete(self, storage_ref: str) -> bool:
        """Delete the file and any directories left empty. False if it was already gone."""
        file_path = self._full_path(storage_ref)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root and not any(parent.iterdir()):
            parent.rmdir()
            parent = parent.parent
        return True
