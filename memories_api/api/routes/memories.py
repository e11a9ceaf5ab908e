from typing import Annotated
from fastapi import APIRouter, Depends, Path, status
from sqlmodel import Session
from memories_api.api.deps import get_auth_context
from memories_api.core.security import AuthContext
from memories_api.db.session import get_session
from memories_api.models.memory import Memory
from memories_api.schemas.memory import MemoryOut, MemoryPayload, MemorySummary
from memories_api.services.memory_service import (
    add_memory,
    edit_memory,
    list_own_memories,
    read_memory,
    remove_memory,
)

# canonical 8-4-4-4-12 form only; braces, urn prefix and bare hex are rejected
MemoryId = Annotated[
    str,
    Path(pattern=r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$'),
]

router = APIRouter(
    prefix='/memories',
    tags=['memories'],
    dependencies=[Depends(get_auth_context)],
)


def _to_memory_out(record: Memory) -> MemoryOut:
    return MemoryOut(
        id=record.id,
        content=record.content,
        cover_url=record.cover_url,
        is_public=record.is_public,
        user_id=record.user_id,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.get('', response_model=list[MemorySummary])
def list_memories_endpoint(
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(get_auth_context),
) -> list[MemorySummary]:
    return list_own_memories(session, auth)


@router.post('', response_model=MemoryOut, status_code=status.HTTP_201_CREATED)
def create_memory_endpoint(
    payload: MemoryPayload,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(get_auth_context),
) -> MemoryOut:
    return _to_memory_out(add_memory(session, auth, payload))


@router.get('/{memory_id}', response_model=MemoryOut)
def get_memory_endpoint(
    memory_id: MemoryId,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(get_auth_context),
) -> MemoryOut:
    return _to_memory_out(read_memory(session, auth, memory_id.lower()))


@router.put('/{memory_id}', response_model=MemoryOut)
def update_memory_endpoint(
    memory_id: MemoryId,
    payload: MemoryPayload,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(get_auth_context),
) -> MemoryOut:
    return _to_memory_out(edit_memory(session, auth, memory_id.lower(), payload))


@router.delete('/{memory_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_memory_endpoint(
    memory_id: MemoryId,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(get_auth_context),
) -> None:
    remove_memory(session, auth, memory_id.lower())
