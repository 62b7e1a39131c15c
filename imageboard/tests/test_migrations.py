import io
from pathlib import Path

from alembic import command
from alembic.config import Config

import imageboard

ALEMBIC_DIR = Path(imageboard.__file__).resolve().parent / 'alembic'


def offline_sql(url: str, revision: str = 'head', downgrade: bool = False) -> str:
    buf = io.StringIO()
    cfg = Config(output_buffer=buf)
    cfg.set_main_option('script_location', str(ALEMBIC_DIR))
    cfg.set_main_option('sqlalchemy.url', url)
    if downgrade:
        command.downgrade(cfg, revision, sql=True)
    else:
        command.upgrade(cfg, revision, sql=True)
    return buf.getvalue()


def test_offline_upgrade_renders_schema():
    sql = offline_sql('sqlite:///offline.db')
    assert 'CREATE TABLE boards' in sql
    assert 'CREATE TABLE comments' in sql
    assert 'CREATE INDEX ix_comments_op' in sql
    assert 'INSERT INTO alembic_version' in sql
    assert "'0001'" in sql


def test_offline_upgrade_for_postgres():
    sql = offline_sql('postgresql://user:pw@localhost/board')
    assert 'CREATE TABLE boards' in sql
    assert 'REFERENCES comments (id)' in sql


def test_offline_downgrade_drops_tables():
    sql = offline_sql('sqlite:///offline.db', revision='0001:base', downgrade=True)
    assert 'DROP TABLE comments' in sql
    assert 'DROP TABLE boards' in sql
