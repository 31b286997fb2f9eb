"""
Custom exceptions for the Infrastructure layer.
"""


class InfrastructureError(Exception):
    """Base class for exceptions in the infrastructure layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(InfrastructureError):
    """A record store could not read or write its backing storage."""

    status_code = 500


class RecordNotFoundError(InfrastructureError):
    """No record carries the requested identifier."""

    status_code = 404
