"""Error taxonomy shared by the storage layer and the HTTP handlers."""

from __future__ import annotations


class KVStoreError(Exception):
    """Base error. `message` is always safe to return to the caller."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(KVStoreError):
    status_code = 400


class MalformedInput(KVStoreError):
    status_code = 400


class NotFoundError(KVStoreError):
    status_code = 404

    def __init__(self, message: str = "Item not found") -> None:
        super().__init__(message)


class StorageUnavailable(KVStoreError):
    status_code = 500
