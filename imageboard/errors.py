"""
Error taxonomy for the ingestion pipeline.
Every failure the core raises is one of these; main.py maps them to HTTP responses.
"""

from typing import Any, Dict, Optional


class BoardError(Exception):
    """Base class. Carries a stable code, an HTTP status and structured context."""

    code = 'board_error'
    status_code = 500

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {'error': self.code, 'detail': self.message, **self.context}


# ==================== CLIENT REJECTIONS ====================

class ValidationError(BoardError):
    code = 'validation_error'
    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message, field=field)


class MissingDataError(BoardError):
    code = 'missing_data'
    status_code = 400

    def __init__(self, message: str = 'multipart body has no data part'):
        super().__init__(message)


class ParseError(BoardError):
    code = 'parse_error'
    status_code = 400

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f'invalid data part: {cause}')


class UnknownMediaTypeError(BoardError):
    code = 'unknown_media_type'
    status_code = 415

    def __init__(self, mime: Optional[str]):
        self.mime = mime
        super().__init__('unsupported or unrecognised media type', mime=mime)


class ThumbnailError(BoardError):
    code = 'thumbnail_error'
    status_code = 422

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f'could not create thumbnail: {cause}')


class NotFoundError(BoardError):
    code = 'not_found'
    status_code = 404

    def __init__(self, what: str, key: Any):
        super().__init__(f'{what} not found', what=what, key=key)


class BlobNotFoundError(NotFoundError):
    def __init__(self, name: str):
        super().__init__('media', name)


# ==================== SERVER FAILURES ====================

class StoreError(BoardError):
    code = 'store_error'
    status_code = 500

    def __init__(self, operation: str, cause: Exception):
        self.cause = cause
        # the driver message may leak table names or paths, keep it out of the response
        super().__init__(f'{operation} failed', operation=operation)
