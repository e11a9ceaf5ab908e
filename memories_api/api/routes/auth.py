from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from memories_api.core.security import TokenService, get_token_service
from memories_api.db.session import get_session
from memories_api.schemas.auth import LoginRequest, LogoutRequest, RefreshRequest, RegisterRequest, TokenResponse
from memories_api.schemas.user import UserOut
from memories_api.services.auth_service import (
    authenticate_user,
    create_user,
    issue_token_pair,
    revoke_refresh_token,
    rotate_refresh_token,
)

router = APIRouter(prefix='/auth', tags=['auth'])


@router.post('/register', response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, session: Session = Depends(get_session)) -> UserOut:
    user = create_user(session, payload.email, payload.password)
    return UserOut(id=user.id, email=user.email, is_active=user.is_active)


@router.post('/login', response_model=TokenResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    user = authenticate_user(session, payload.email, payload.password)
    access_token, refresh_token = issue_token_pair(session, tokens, user.id)
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post('/refresh', response_model=TokenResponse)
def refresh(
    payload: RefreshRequest,
    session: Session = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    access_token, refresh_token = rotate_refresh_token(session, tokens, payload.refresh_token)
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post('/logout')
def logout(payload: LogoutRequest, session: Session = Depends(get_session)) -> dict:
    revoke_refresh_token(session, payload.refresh_token)
    return {'status': 'ok'}
