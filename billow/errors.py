"""
Error taxonomy shared by the pipeline, the store and the HTTP layer.

Every error carries the HTTP status it maps to and a stable ``reason`` code.
Server-side errors keep a generic message; the underlying cause is chained
and logged, never sent to the caller.
"""
from __future__ import annotations

from typing import Optional


class BillowError(Exception):
    status_code = 500
    reason = "InternalError"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(BillowError):
    status_code = 401
    reason = "Unauthenticated"
    default_message = "Login required"


class InvalidCredentials(BillowError):
    status_code = 401
    reason = "InvalidCredentials"
    default_message = "Invalid credentials"


class RejectedInput(BillowError):
    status_code = 400
    reason = "RejectedInput"
    default_message = "Invalid request"


class NoFileAttached(RejectedInput):
    reason = "NoFileAttached"
    default_message = "No file uploaded"


class UploadTooLarge(RejectedInput):
    status_code = 413
    reason = "UploadTooLarge"
    default_message = "Uploaded file is too large"


class MalformedRequest(RejectedInput):
    reason = "MalformedRequest"
    default_message = "Malformed request"


class AccountExists(RejectedInput):
    reason = "AccountExists"
    default_message = "User already exists"


class BinaryWriteError(BillowError):
    reason = "BinaryWriteError"
    default_message = "File upload failed"


class StorageError(BillowError):
    reason = "StorageError"
    default_message = "Receipt storage unavailable"
