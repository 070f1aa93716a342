"""Error taxonomy shared by the store, services and HTTP layer.

Entity lookups that miss are not errors: services return ``None`` and the
route answers 404. The exceptions here cover the cases that cannot be
expressed as a value:

- ``DocumentNotFoundError``: a whole document is missing and has no seed.
- ``InvalidInputError``: bad identifiers or a rejected upload.
- ``StorageError``: the file system or JSON parser failed.
"""

from fastapi import status


class TrackerError(Exception):
    """Base class for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DocumentNotFoundError(TrackerError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidInputError(TrackerError):
    status_code = status.HTTP_400_BAD_REQUEST


class StorageError(TrackerError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
