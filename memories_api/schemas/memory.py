from datetime import datetime

from pydantic import Field, field_serializer, field_validator

from memories_api.models.base import ensure_utc
from memories_api.schemas.base import CamelModel


class MemoryPayload(CamelModel):
    """Body accepted by both create and update."""

    content: str = Field(..., min_length=1)
    cover_url: str
    is_public: bool = False

    @field_validator('is_public', mode='before')
    @classmethod
    def null_means_private(cls, value):
        if value is None:
            return False
        return value


class MemoryOut(CamelModel):
    id: str
    content: str
    cover_url: str
    is_public: bool
    user_id: str
    created_at: datetime
    updated_at: datetime

    @field_serializer('created_at', 'updated_at')
    def serialize_utc(self, value: datetime) -> str:
        # stores hand back naive values; they are UTC
        return ensure_utc(value).isoformat()


class MemorySummary(CamelModel):
    id: str
    cover_url: str
    excerpt: str
