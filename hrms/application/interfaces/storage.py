"""Document storage port."""

from collections.abc import AsyncIterator
from typing import Any, BinaryIO, Protocol


class IDocumentStorage(Protocol):
    """Object storage for uploaded document files."""

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
    ) -> dict[str, Any]:
        """Store file content, verifying the SHA-256 checksum. Returns size/checksum."""

    def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if it was already gone."""

    async def exists(self, storage_ref: str) -> bool:
        """Return True if content is stored under storage_ref."""
