from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from uuid import uuid4

from jose import JWTError, jwt
from loguru import logger
from passlib.context import CryptContext

from memories_api.core.config import settings
from memories_api.core.errors import AuthenticationError

ACCESS_TOKEN = 'access'
REFRESH_TOKEN = 'refresh'

pwd_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, produced by the authentication gate."""

    subject: str


class TokenService:
    """Issues and verifies signed tokens carrying a subject identifier.

    One instance is built from settings per process and shared read-only.
    """

    def __init__(self, secret_key: str, algorithm: str = 'HS256') -> None:
        if not secret_key:
            raise RuntimeError("SECRET_KEY must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm

    def issue(self, subject: str, token_type: str, expires_delta: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': subject,
            'type': token_type,
            'jti': uuid4().hex,
            'iat': now,
            'exp': now + expires_delta,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str, expected_type: str = ACCESS_TOKEN) -> str:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.warning('auth.token_rejected', reason='decode', error=str(exc))
            raise AuthenticationError('Invalid token') from exc

        if payload.get('type') != expected_type:
            logger.warning('auth.token_rejected', reason='type', token_type=payload.get('type'))
            raise AuthenticationError('Invalid token type')

        subject = payload.get('sub')
        if not subject or not isinstance(subject, str):
            logger.warning('auth.token_rejected', reason='subject')
            raise AuthenticationError('Invalid token')
        return subject

    def issue_access_token(self, subject: str) -> str:
        return self.issue(
            subject,
            ACCESS_TOKEN,
            timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def issue_refresh_token(self, subject: str) -> tuple[str, datetime]:
        expires_delta = timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES)
        expires_at = datetime.now(timezone.utc) + expires_delta
        return self.issue(subject, REFRESH_TOKEN, expires_delta), expires_at


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(settings.SECRET_KEY, settings.ALGORITHM)


def reset_token_service() -> None:
    get_token_service.cache_clear()
