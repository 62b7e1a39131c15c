"""
Field validation for board, thread and comment creation.

All functions are pure: they return a new, validated form or raise
ValidationError for the first field that breaks a rule. Subject and comment
text are rendered only once every rule has passed.
"""

from typing import Optional

from .errors import ValidationError
from .markup import render_comment, render_subject
from .schemas.boards import CreateBoard
from .schemas.comments import CreateComment, CreateThread

MAX_CODE_LEN = 5
MAX_NAME_LEN = 100
MAX_DESC_LEN = 100
MAX_ALIAS_LEN = 100
MAX_MEDIA_DESC_LEN = 100

BOARD_LIMIT_FIELDS = (
    'max_threads',
    'max_replies',
    'max_img_replies',
    'max_sub_len',
    'max_com_len',
    'max_file_size',
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _check_required(field: str, value: Optional[str], max_len: int):
    if _is_blank(value):
        raise ValidationError(field, f'{field} is required')
    if len(value) > max_len:
        raise ValidationError(field, f'{field} is longer than {max_len} characters')


def _check_optional(field: str, value: Optional[str], max_len: int):
    if value is not None and len(value) > max_len:
        raise ValidationError(field, f'{field} is longer than {max_len} characters')


def validate_board(form: CreateBoard) -> CreateBoard:
    _check_required('code', form.code, MAX_CODE_LEN)
    _check_required('name', form.name, MAX_NAME_LEN)
    _check_required('desc', form.desc, MAX_DESC_LEN)
    for field in BOARD_LIMIT_FIELDS:
        if getattr(form, field) < 0:
            raise ValidationError(field, f"{field} can't be negative")
    return form


def validate_thread(form: CreateThread) -> CreateThread:
    if _is_blank(form.sub) and _is_blank(form.com):
        raise ValidationError('com', 'a subject or a comment is required')
    _check_required('board', form.board, MAX_CODE_LEN)
    _check_optional('alias', form.alias, MAX_ALIAS_LEN)
    _check_optional('media_desc', form.media_desc, MAX_MEDIA_DESC_LEN)
    return form.model_copy(update={
        'sub': render_subject(form.sub) if not _is_blank(form.sub) else None,
        'com': render_comment(form.com) if not _is_blank(form.com) else None,
    })


def validate_comment(form: CreateComment, has_media: bool) -> CreateComment:
    """
    has_media tells whether the request carried a media part; it arrives out
    of band from the JSON payload, so the text-or-media rule is checked here
    after decoding instead of in the schema.
    """
    if form.op < 0:
        raise ValidationError('op', "op can't be negative")
    _check_optional('alias', form.alias, MAX_ALIAS_LEN)
    _check_optional('media_desc', form.media_desc, MAX_MEDIA_DESC_LEN)
    if _is_blank(form.com) and not has_media:
        raise ValidationError('com', 'a comment or an image is required')
    return form.model_copy(update={
        'com': render_comment(form.com) if not _is_blank(form.com) else None,
    })


def check_board_limits(board, sub: Optional[str] = None, com: Optional[str] = None,
                       media_size: Optional[int] = None):
    """Check raw text lengths and media size against a board's limits. A limit of 0 disables the check."""
    if sub and board.max_sub_len and len(sub) > board.max_sub_len:
        raise ValidationError('sub', f'subject is longer than {board.max_sub_len} characters')
    if com and board.max_com_len and len(com) > board.max_com_len:
        raise ValidationError('com', f'comment is longer than {board.max_com_len} characters')
    if media_size is not None and board.max_file_size and media_size > board.max_file_size:
        raise ValidationError('media', f'file is larger than {board.max_file_size} bytes')


def check_reply_limits(board, replies: int, images: int, has_media: bool):
    """Reject a reply once its thread has used up the board's reply or image quota."""
    if board.max_replies and replies >= board.max_replies:
        raise ValidationError('op', 'thread has reached its reply limit')
    if has_media and board.max_img_replies and images >= board.max_img_replies:
        raise ValidationError('media', 'thread has reached its image limit')
