from loguru import logger
from sqlmodel import SQLModel
from memories_api.db.session import engine
from memories_api.core.config import settings
from memories_api.models import (  # noqa: F401
    memory,
    refresh_token,
    user,
)


def _should_create_tables() -> bool:
    return (
        settings.DATABASE_URL.startswith('sqlite')
        or settings.ENV != 'production'
        or settings.AUTO_CREATE_TABLES
    )


def init_db(drop_all: bool = False) -> None:
    if drop_all:
        SQLModel.metadata.drop_all(engine)
    if _should_create_tables():
        SQLModel.metadata.create_all(engine)
        logger.debug('db.tables_ready', tables=sorted(SQLModel.metadata.tables))
