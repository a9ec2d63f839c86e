"""
Bearer-token authentication.

The clinic runs a demo login: any non-empty username/password pair receives
a signed token. Tokens are HS256 JWTs carrying the demo user profile, so the
API stays stateless and the frontend only has to attach
``Authorization: Bearer <token>``.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from jose import jwt as jose_jwt
from pydantic import BaseModel

from .config import SECRET_KEY, TOKEN_ALGORITHM, TOKEN_EXPIRE_HOURS

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: int
    username: str
    nome: str
    email: str
    role: str


def demo_user(username: str) -> CurrentUser:
    """Profile handed out for any successful demo login"""
    return CurrentUser(
        id=1,
        username=username,
        nome=f"Dr. {username}",
        email=f"{username}@soulsalutte.com",
        role="Physiotherapist",
    )


def create_access_token(user: CurrentUser, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT for ``user``"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=TOKEN_EXPIRE_HOURS))
    to_encode: dict[str, Any] = {
        "sub": str(user.id),
        "username": user.username,
        "nome": user.nome,
        "email": user.email,
        "role": user.role,
        "exp": expire,
    }
    return jose_jwt.encode(to_encode, SECRET_KEY, algorithm=TOKEN_ALGORITHM)


def verify_access_token(token: str) -> Optional[CurrentUser]:
    """
    Verify and decode a token

    Returns:
        The user the token was issued to, None if invalid or expired
    """
    try:
        payload = jose_jwt.decode(token, SECRET_KEY, algorithms=[TOKEN_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    try:
        return CurrentUser(
            id=int(payload["sub"]),
            username=payload["username"],
            nome=payload["nome"],
            email=payload["email"],
            role=payload["role"],
        )
    except (KeyError, ValueError, TypeError) as e:
        logger.warning(f"⚠️ Token missing claims: {e}")
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """Resolve the bearer token into the current user"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = verify_access_token(credentials.credentials)
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"✅ User authenticated: {user.username}")
    return user
