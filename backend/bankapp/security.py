from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from bankapp.settings import get_settings


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    role: str


@lru_cache
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str) -> str:
    return _pwd_context(get_settings().bcrypt_rounds).hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return _pwd_context(get_settings().bcrypt_rounds).verify(password, password_hash)


def create_access_token(claims: TokenClaims, *, now: dt.datetime | None = None) -> str:
    settings = get_settings()
    issued = now or dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": claims.user_id,
        "email": claims.email,
        "role": claims.role,
        "iat": issued,
        "exp": issued + dt.timedelta(minutes=settings.jwt_expires_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims | None:
    """Return the claims, or None if the token is malformed, tampered or expired."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        return None

    return TokenClaims(
        user_id=user_id,
        email=str(payload.get("email", "")),
        role=str(payload.get("role", "")),
    )
