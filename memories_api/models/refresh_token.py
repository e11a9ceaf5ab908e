from datetime import datetime
from sqlmodel import Field, SQLModel
from memories_api.models.base import CreatedAtModel, IDModel, TIMESTAMP_TYPE


class RefreshToken(IDModel, CreatedAtModel, SQLModel, table=True):
    """Server-side record of an issued refresh token; deleting it revokes the token."""

    __tablename__ = 'refresh_tokens'

    token: str = Field(index=True, unique=True, max_length=512)
    user_id: str = Field(index=True)
    expires_at: datetime = Field(sa_type=TIMESTAMP_TYPE)
