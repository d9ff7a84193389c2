from billow.schemas.account import Credentials, MessageResponse
from billow.schemas.receipt import (
    ErrorResponse,
    IngestResponse,
    ReceiptRecord,
    UploadRequest,
)

__all__ = [
    "Credentials",
    "ErrorResponse",
    "IngestResponse",
    "MessageResponse",
    "ReceiptRecord",
    "UploadRequest",
]
