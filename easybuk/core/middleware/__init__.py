from easybuk.core.middleware.request_id import request_id_middleware
from easybuk.core.middleware.error_handler import (
    error_envelope_middleware,
    validation_exception_handler,
)

__all__ = [
    "request_id_middleware",
    "error_envelope_middleware",
    "validation_exception_handler",
]
