"""Site sign-up / sign-in. Sessions are JWTs carried in a cookie or Bearer header."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, EmailStr
from sqlalchemy import select
from sqlalchemy.orm import Session

from growtools.backend.auth import (
    SessionUser,
    create_session_token,
    get_current_user,
    get_password_hash,
    verify_password,
)
from growtools.backend.config import get_settings
from growtools.backend.deps import get_db
from growtools.backend.models.user import ROLE_USER, STATUS_SUSPENDED, User
from growtools.backend.services.rate_limit import check_rate_limit, get_client_ip

router = APIRouter()
logger = logging.getLogger(__name__)


class RegisterBody(BaseModel):
    email: EmailStr
    password: str
    name: str | None = None


class LoginBody(BaseModel):
    email: EmailStr
    password: str


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    id: str
    email: str
    role: str


def _set_session_cookie(response: Response, token: str) -> None:
    s = get_settings()
    response.set_cookie(
        s.session_cookie_name,
        token,
        max_age=s.jwt_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=s.app_env == "production",
    )


@router.post("/register", status_code=201)
def register(body: RegisterBody, db: Session = Depends(get_db)):
    email = body.email.lower().strip()
    if len(body.password) < 8:
        raise HTTPException(status_code=400, detail="Password must be at least 8 characters")
    existing = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=400, detail="An account with this email already exists")
    user = User(
        email=email,
        name=(body.name or "").strip() or None,
        password_hash=get_password_hash(body.password),
        role=ROLE_USER,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("user registered id=%s", user.id)
    return {"id": user.id, "email": user.email, "name": user.name}


@router.post("/login", response_model=SessionResponse)
def login(body: LoginBody, request: Request, response: Response, db: Session = Depends(get_db)):
    s = get_settings()
    email = body.email.lower().strip()
    limit = check_rate_limit(
        f"{get_client_ip(request)}:{email}",
        "login",
        s.login_rate_limit_attempts,
        s.login_rate_limit_window_seconds,
    )
    if not limit.allowed:
        raise HTTPException(
            status_code=429,
            detail="Too many login attempts. Please try again later.",
            headers={"Retry-After": str(limit.retry_after)},
        )
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if user.status == STATUS_SUSPENDED:
        raise HTTPException(status_code=403, detail="Your account has been suspended. Please contact support.")
    token = create_session_token(user.id, user.email, user.role)
    _set_session_cookie(response, token)
    return SessionResponse(access_token=token, id=user.id, email=user.email, role=user.role)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(get_settings().session_cookie_name)
    return {"status": "ok"}


@router.get("/me")
def me(user: SessionUser = Depends(get_current_user)):
    return {"id": user.id, "email": user.email, "role": user.role}
