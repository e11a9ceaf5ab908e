import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from memories_api.models.base import IDModel, TimestampModel


class Memory(IDModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'memories'

    user_id: str = Field(index=True)
    content: str = Field(sa_type=sa.Text)
    cover_url: str
    is_public: bool = False
