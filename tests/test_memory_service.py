import pytest
from sqlmodel import Session, SQLModel, create_engine

from memories_api.core.errors import NotFoundError, UnauthorizedError
from memories_api.core.security import AuthContext
from memories_api.models.memory import Memory
from memories_api.schemas.memory import MemoryPayload
from memories_api.services.memory_service import (
    add_memory,
    can_read,
    can_write,
    edit_memory,
    list_own_memories,
    make_excerpt,
    read_memory,
    remove_memory,
)

OWNER = AuthContext(subject='owner')
STRANGER = AuthContext(subject='stranger')


@pytest.fixture
def session():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    with Session(engine) as db_session:
        yield db_session
    engine.dispose()


def _payload(**overrides) -> MemoryPayload:
    data = {'content': 'a day at the beach', 'coverUrl': 'http://x/beach.png'}
    data.update(overrides)
    return MemoryPayload.model_validate(data)


@pytest.mark.parametrize(
    ('content', 'expected'),
    [
        ('', '...'),
        ('hi', 'hi...'),
        ('x' * 115, 'x' * 115 + '...'),
        ('y' * 116, 'y' * 115 + '...'),
    ],
)
def test_make_excerpt(content, expected):
    assert make_excerpt(content) == expected


def test_visibility_rules():
    private = Memory(user_id='owner', content='c', cover_url='u', is_public=False)
    public = Memory(user_id='owner', content='c', cover_url='u', is_public=True)

    assert can_read(private, OWNER)
    assert not can_read(private, STRANGER)
    assert can_read(public, STRANGER)
    assert can_write(public, OWNER)
    assert not can_write(public, STRANGER)


def test_service_operations_thread_auth_context(session):
    record = add_memory(session, OWNER, _payload())
    assert record.user_id == 'owner'
    assert record.is_public is False

    assert [item.id for item in list_own_memories(session, OWNER)] == [record.id]
    assert list_own_memories(session, STRANGER) == []

    with pytest.raises(UnauthorizedError):
        read_memory(session, STRANGER, record.id)
    with pytest.raises(UnauthorizedError):
        edit_memory(session, STRANGER, record.id, _payload(content='nope'))
    with pytest.raises(UnauthorizedError):
        remove_memory(session, STRANGER, record.id)

    updated = edit_memory(session, OWNER, record.id, _payload(content='edited', isPublic=True))
    assert updated.content == 'edited'
    assert read_memory(session, STRANGER, record.id).content == 'edited'

    remove_memory(session, OWNER, record.id)
    with pytest.raises(NotFoundError):
        read_memory(session, OWNER, record.id)
