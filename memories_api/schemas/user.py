from pydantic import EmailStr

from memories_api.schemas.base import CamelModel


class UserOut(CamelModel):
    id: str
    email: EmailStr
    is_active: bool
