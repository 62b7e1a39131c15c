from datetime import datetime
from types import SimpleNamespace

from imageboard.schemas.boards import BoardOut
from imageboard.schemas.comments import CommentOut, ThreadOut


def test_output_models_read_orm_attributes():
    for model in (BoardOut, CommentOut, ThreadOut):
        assert model.model_config.get('from_attributes') is True
        # v2 config only, no legacy inner Config class
        assert 'Config' not in vars(model)


def test_comment_out_from_row():
    row = SimpleNamespace(
        id=7, alias=None, sub=None, com='hi', op=3, board='g',
        file_name=None, media_name=None, media_size=None, media_ext=None,
        media_desc=None, thumb_name=None, thumb_size=None,
        created_at=datetime(2024, 1, 1),
    )
    out = CommentOut.model_validate(row)
    assert out.id == 7
    assert out.op == 3
    assert out.com == 'hi'


def test_thread_out_counts_default_to_zero():
    row = SimpleNamespace(id=1, board='g', com='op', op=None)
    out = ThreadOut.model_validate(row)
    assert (out.replies, out.images) == (0, 0)
