"""响应格式化基础设施组件导出"""

from .responder import (
    IResponder,
    Response,
    Found,
    Created,
    Updated,
    Accepted,
    NoContent,
    CreateOutcome,
    UpdateOutcome,
    DeleteOutcome,
    ALLOWED_STATUS,
    ensure_outcome,
)
from .response_formatter import (
    JSONAPI_MEDIA_TYPE,
    data_document,
    meta_document,
    error_document,
    single_error_document,
)

__all__ = [
    "IResponder",
    "Response",
    "Found",
    "Created",
    "Updated",
    "Accepted",
    "NoContent",
    "CreateOutcome",
    "UpdateOutcome",
    "DeleteOutcome",
    "ALLOWED_STATUS",
    "ensure_outcome",
    "JSONAPI_MEDIA_TYPE",
    "data_document",
    "meta_document",
    "error_document",
    "single_error_document",
]
