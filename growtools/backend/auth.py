"""Session JWTs, password hashing and role checks."""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from growtools.backend.config import get_settings
from growtools.backend.deps import get_db
from growtools.backend.models.user import ROLE_ADMIN, ROLE_TEST_USER, STATUS_SUSPENDED, User

security = HTTPBearer(auto_error=False)

# bcrypt only reads the first 72 bytes; newer releases raise past that
_MAX_PW_BYTES = 72


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def bypasses_subscription(self) -> bool:
        return self.role in (ROLE_ADMIN, ROLE_TEST_USER)


def _to_bytes(s: str) -> bytes:
    b = s.encode("utf-8")
    return b[: _MAX_PW_BYTES] if len(b) > _MAX_PW_BYTES else b


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_to_bytes(plain), hashed.encode() if isinstance(hashed, str) else hashed)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_to_bytes(password), bcrypt.gensalt()).decode()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    s = get_settings()
    to_encode = data.copy()
    exp = expires_delta or timedelta(minutes=s.jwt_expire_minutes)
    to_encode.update({"exp": datetime.utcnow() + exp})
    return jwt.encode(to_encode, s.jwt_secret, algorithm=s.jwt_algorithm)


def create_session_token(user_id: str, email: str, role: str) -> str:
    return create_access_token({"sub": str(user_id), "email": email, "role": role})


def decode_token(token: str) -> Optional[dict]:
    s = get_settings()
    try:
        return jwt.decode(token, s.jwt_secret, algorithms=[s.jwt_algorithm])
    except JWTError:
        return None


def session_from_token(token: str | None) -> SessionUser | None:
    if not token:
        return None
    payload = decode_token(token)
    if not payload or "sub" not in payload:
        return None
    return SessionUser(
        id=str(payload["sub"]),
        email=str(payload.get("email") or ""),
        role=str(payload.get("role") or ""),
    )


def token_from_request(request: Request) -> str | None:
    """Bearer header first (API clients, extension), then the session cookie (browser)."""
    header = request.headers.get("Authorization") or ""
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return request.cookies.get(get_settings().session_cookie_name)


async def get_optional_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> SessionUser | None:
    if credentials:
        return session_from_token(credentials.credentials)
    return session_from_token(request.cookies.get(get_settings().session_cookie_name))


async def get_current_user(session: SessionUser | None = Depends(get_optional_session)) -> SessionUser:
    if not session:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return session


async def get_current_admin(session: SessionUser | None = Depends(get_optional_session)) -> SessionUser:
    if not session or not session.is_admin:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return session


def get_current_account(
    session: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> SessionUser:
    """Session checked against the users table; role comes from the row, not the token."""
    user = db.get(User, session.id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if user.status == STATUS_SUSPENDED:
        raise HTTPException(status_code=403, detail="Your account has been suspended. Please contact support.")
    return SessionUser(id=user.id, email=user.email, role=user.role)
