"""
Domain errors raised by the registration, catalog, and storage layers.

server.py translates each of these into a JSON body of the form
{"message": "..."} with the status carried on the exception.
"""


class BackendError(Exception):
    status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BackendError):
    """Missing or malformed request field."""
    status = 400


class NotFoundError(BackendError):
    """Unknown major, student email, or student id."""
    status = 404


class StorageWriteError(BackendError):
    """The student file could not be written. Never retried."""
    status = 500
