"""Document storage backends."""

from hrms.infrastructure.storage.local_storage import LocalDocumentStorage

__all__ = ["LocalDocumentStorage"]
