import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..auth import CurrentUser, create_access_token, demo_user, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    user: CurrentUser


class VerifyResponse(BaseModel):
    valid: bool
    user: CurrentUser


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest):
    """Demo login - any non-empty username and password pair is accepted"""
    username = data.username.strip()
    if not username or not data.password:
        logger.warning("⚠️ Login attempt with empty credentials")
        raise HTTPException(status_code=401, detail="Username and password are required")

    user = demo_user(username)
    logger.info(f"🔐 Demo login for {username}")
    return LoginResponse(token=create_access_token(user), user=user)


@router.get("/verify", response_model=VerifyResponse)
async def verify(current_user: CurrentUser = Depends(get_current_user)):
    """Check that the attached token is still valid"""
    return VerifyResponse(valid=True, user=current_user)


@router.post("/logout")
async def logout(current_user: CurrentUser = Depends(get_current_user)):
    """Tokens are stateless; the client drops its copy"""
    logger.info(f"👋 Logout for {current_user.username}")
    return {"message": "Logged out"}
