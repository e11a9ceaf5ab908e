from typing import Optional
from datetime import datetime, timezone
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from memories_api.core.errors import AuthenticationError, ConflictError
from memories_api.core.security import (
    REFRESH_TOKEN,
    TokenService,
    hash_password,
    verify_password,
)
from memories_api.models.base import ensure_utc
from memories_api.models.refresh_token import RefreshToken
from memories_api.models.user import User


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def create_user(session: Session, email: str, password: str) -> User:
    if get_user_by_email(session, email):
        raise ConflictError('Email already registered')
    user = User(email=email, hashed_password=hash_password(password))
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError('Email already registered') from exc
    session.refresh(user)
    logger.info('auth.user_registered', user_id=user.id)
    return user


def authenticate_user(session: Session, email: str, password: str) -> User:
    user = get_user_by_email(session, email)
    if not user or not verify_password(password, user.hashed_password):
        raise AuthenticationError('Invalid email or password')
    return user


def store_refresh_token(session: Session, token: str, user_id: str, expires_at: datetime) -> None:
    session.add(RefreshToken(token=token, user_id=user_id, expires_at=expires_at))
    session.commit()


def revoke_refresh_token(session: Session, token: str) -> None:
    record = session.exec(select(RefreshToken).where(RefreshToken.token == token)).first()
    if record:
        session.delete(record)
        session.commit()


def validate_refresh_token(session: Session, tokens: TokenService, token: str) -> str:
    user_id = tokens.verify(token, REFRESH_TOKEN)

    record = session.exec(select(RefreshToken).where(RefreshToken.token == token)).first()
    if not record:
        raise AuthenticationError('Refresh token revoked')
    if ensure_utc(record.expires_at) < datetime.now(timezone.utc):
        session.delete(record)
        session.commit()
        raise AuthenticationError('Refresh token expired')

    return user_id


def issue_token_pair(session: Session, tokens: TokenService, user_id: str) -> tuple[str, str]:
    access_token = tokens.issue_access_token(user_id)
    refresh_token, expires_at = tokens.issue_refresh_token(user_id)
    store_refresh_token(session, refresh_token, user_id, expires_at)
    return access_token, refresh_token


def rotate_refresh_token(session: Session, tokens: TokenService, token: str) -> tuple[str, str]:
    user_id = validate_refresh_token(session, tokens, token)
    revoke_refresh_token(session, token)
    return issue_token_pair(session, tokens, user_id)
