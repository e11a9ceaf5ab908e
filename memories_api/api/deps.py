from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from memories_api.core.errors import AuthenticationError
from memories_api.core.security import AuthContext, TokenService, get_token_service

security = HTTPBearer(auto_error=False)


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError('Missing credentials')
    return AuthContext(subject=tokens.verify(credentials.credentials))
