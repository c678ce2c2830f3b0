"""Exceptions for files app."""

from server.common.exceptions import ConflictError, InvalidArgumentError


class StorageKeyConflictError(ConflictError):
    """Raised when an object already exists at the resolved storage key."""

    def __init__(self, storage_key: str) -> None:
        """Initialize StorageKeyConflictError.

        Args:
            storage_key: Key that is already taken.
        """
        self.storage_key = storage_key
        super().__init__('A file with this name already exists')


class UploadRejectedError(InvalidArgumentError):
    """Raised when an upload violates size or type limits."""
