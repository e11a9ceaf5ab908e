from memories_api.models.base import CreatedAtModel, IDModel, TimestampModel
from memories_api.models.user import User
from memories_api.models.refresh_token import RefreshToken
from memories_api.models.memory import Memory

__all__ = [
    'IDModel',
    'CreatedAtModel',
    'TimestampModel',
    'User',
    'RefreshToken',
    'Memory',
]
