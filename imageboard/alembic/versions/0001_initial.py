"""initial

Revision ID: 0001
Revises: 
Create Date: 2025-04-15 17:58:34.000000

"""
from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('boards',
        sa.Column('code', sa.String(5), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('desc', sa.String(100), nullable=False),
        sa.Column('max_threads', sa.Integer, nullable=False),
        sa.Column('max_replies', sa.Integer, nullable=False),
        sa.Column('max_img_replies', sa.Integer, nullable=False),
        sa.Column('max_sub_len', sa.Integer, nullable=False),
        sa.Column('max_com_len', sa.Integer, nullable=False),
        sa.Column('max_file_size', sa.Integer, nullable=False),
        sa.Column('is_nsfw', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_table('comments',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('alias', sa.String(100), nullable=True),
        sa.Column('sub', sa.Text(), nullable=True),
        sa.Column('com', sa.Text(), nullable=True),
        sa.Column('op', sa.Integer, sa.ForeignKey('comments.id'), nullable=True),
        sa.Column('file_name', sa.String(), nullable=True),
        sa.Column('media_name', sa.String(), nullable=True),
        sa.Column('media_size', sa.Integer, nullable=True),
        sa.Column('media_ext', sa.String(10), nullable=True),
        sa.Column('media_desc', sa.String(100), nullable=True),
        sa.Column('thumb_name', sa.String(), nullable=True),
        sa.Column('thumb_size', sa.Integer, nullable=True),
        sa.Column('board', sa.String(5), sa.ForeignKey('boards.code'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_comments_id', 'comments', ['id'])
    op.create_index('ix_comments_op', 'comments', ['op'])
    op.create_index('ix_comments_board', 'comments', ['board'])

def downgrade():
    op.drop_index('ix_comments_board', table_name='comments')
    op.drop_index('ix_comments_op', table_name='comments')
    op.drop_index('ix_comments_id', table_name='comments')
    op.drop_table('comments')
    op.drop_table('boards')
