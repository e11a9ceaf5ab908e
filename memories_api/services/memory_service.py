"""Ownership- and visibility-aware operations on memories.

Reads are allowed to the owner, or to anyone when the memory is public.
Writes are owner-only, whatever the visibility.
"""
from loguru import logger
from sqlmodel import Session, select
from memories_api.core.config import settings
from memories_api.core.errors import NotFoundError, UnauthorizedError
from memories_api.core.security import AuthContext
from memories_api.models.memory import Memory
from memories_api.schemas.memory import MemoryPayload, MemorySummary

EXCERPT_SUFFIX = '...'


def make_excerpt(content: str, length: int = 115) -> str:
    # the suffix is appended even when nothing was cut
    return content[:length] + EXCERPT_SUFFIX


def to_summary(record: Memory) -> MemorySummary:
    return MemorySummary(
        id=record.id,
        cover_url=record.cover_url,
        excerpt=make_excerpt(record.content, settings.EXCERPT_LENGTH),
    )


def list_memories(session: Session, user_id: str) -> list[Memory]:
    statement = (
        select(Memory)
        .where(Memory.user_id == user_id)
        .order_by(Memory.created_at.asc(), Memory.id.asc())
    )
    return list(session.exec(statement).all())


def get_memory_or_raise(session: Session, memory_id: str) -> Memory:
    record = session.get(Memory, memory_id)
    if record is None:
        raise NotFoundError('Memory not found')
    return record


def create_memory(session: Session, user_id: str, payload: MemoryPayload) -> Memory:
    record = Memory(
        user_id=user_id,
        content=payload.content,
        cover_url=payload.cover_url,
        is_public=payload.is_public,
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def update_memory(session: Session, record: Memory, payload: MemoryPayload) -> Memory:
    record.content = payload.content
    record.cover_url = payload.cover_url
    record.is_public = payload.is_public
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def delete_memory(session: Session, record: Memory) -> None:
    session.delete(record)
    session.commit()


def can_read(record: Memory, auth: AuthContext) -> bool:
    return record.is_public or record.user_id == auth.subject


def can_write(record: Memory, auth: AuthContext) -> bool:
    return record.user_id == auth.subject


def _deny(record: Memory, auth: AuthContext, action: str) -> None:
    logger.info('memory.access_denied', memory_id=record.id, subject=auth.subject, action=action)
    raise UnauthorizedError()


def list_own_memories(session: Session, auth: AuthContext) -> list[MemorySummary]:
    return [to_summary(record) for record in list_memories(session, auth.subject)]


def add_memory(session: Session, auth: AuthContext, payload: MemoryPayload) -> Memory:
    record = create_memory(session, auth.subject, payload)
    logger.info('memory.created', memory_id=record.id, subject=auth.subject, is_public=record.is_public)
    return record


def read_memory(session: Session, auth: AuthContext, memory_id: str) -> Memory:
    record = get_memory_or_raise(session, memory_id)
    if not can_read(record, auth):
        _deny(record, auth, 'read')
    return record


def edit_memory(session: Session, auth: AuthContext, memory_id: str, payload: MemoryPayload) -> Memory:
    record = get_memory_or_raise(session, memory_id)
    if not can_write(record, auth):
        _deny(record, auth, 'update')
    # no version check: concurrent edits resolve last-write-wins
    record = update_memory(session, record, payload)
    logger.info('memory.updated', memory_id=record.id, subject=auth.subject)
    return record


def remove_memory(session: Session, auth: AuthContext, memory_id: str) -> None:
    record = get_memory_or_raise(session, memory_id)
    if not can_write(record, auth):
        _deny(record, auth, 'delete')
    delete_memory(session, record)
    logger.info('memory.deleted', memory_id=memory_id, subject=auth.subject)
