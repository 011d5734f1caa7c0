"""Document storage errors.

They extend HrmsException, so the API maps them by error_code
(STORAGE_NOT_FOUND is a 404, the rest are 500s).
"""

from typing import Any

from hrms.domain.exceptions import HrmsException


class StorageException(HrmsException):
    """Base for storage failures; every instance carries the storage_ref it concerns."""

    code = "STORAGE_ERROR"

    def __init__(self, message: str, storage_ref: str, **details: Any) -> None:
        super().__init__(message, self.code, {"storage_ref": storage_ref, **details})


class StorageNotFoundError(StorageException):
    code = "STORAGE_NOT_FOUND"

    def __init__(self, storage_ref: str) -> None:
        super().__init__(f"Stored file missing: {storage_ref}", storage_ref)


class StorageUploadError(StorageException):
    code = "STORAGE_UPLOAD_ERROR"

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(f"Could not store {storage_ref}", storage_ref, reason=reason)


class StorageDownloadError(StorageException):
    code = "STORAGE_DOWNLOAD_ERROR"

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(f"Could not read {storage_ref}", storage_ref, reason=reason)


class StorageDeleteError(StorageException):
    code = "STORAGE_DELETE_ERROR"

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(f"Could not remove {storage_ref}", storage_ref, reason=reason)


class StorageChecksumMismatchError(StorageException):
    """The bytes written do not hash to the checksum computed from the upload."""

    code = "STORAGE_CHECKSUM_ERROR"

    def __init__(self, storage_ref: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Checksum mismatch for {storage_ref}", storage_ref, expected=expected, actual=actual
        )


class StoragePermissionError(StorageException):
    """storage_ref resolves outside the document root."""

    code = "STORAGE_PERMISSION_ERROR"

    def __init__(self, storage_ref: str) -> None:
        super().__init__(f"Storage path escapes the document root: {storage_ref}", storage_ref)
