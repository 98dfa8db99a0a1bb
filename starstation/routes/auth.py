# starstation/routes/auth.py
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from passlib.context import CryptContext
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from starstation.config import SESSION_HOURS
from starstation.database import commit_or_raise, get_db
from starstation.game.clock import now_utc_naive
from starstation.game.errors import DuplicateUsername
from starstation.game.state import new_game_state
from starstation.models.user import User
from starstation.models.session import SessionToken
from starstation.routes.deps import get_now

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()
router = APIRouter(prefix="/auth", tags=["auth"])

# Pi-friendly hashing (no native deps)
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=32)
    password: str = Field(min_length=6, max_length=128)


class RegisterResponse(BaseModel):
    user_id: int
    username: str


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user_id: int
    username: str


class MeResponse(BaseModel):
    user_id: int
    username: str


def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    token = creds.credentials

    sess = db.query(SessionToken).filter(SessionToken.token == token).first()
    if not sess:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    if sess.expires_at <= now_utc_naive():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")

    user = db.query(User).filter(User.id == sess.user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session user")

    return user


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
) -> RegisterResponse:
    username = payload.username.strip()

    existing = db.query(User).filter(User.username == username).first()
    if existing:
        raise DuplicateUsername(username)

    user = User(
        username=username,
        password_hash=pwd_context.hash(payload.password),
        created_at=now,
    )
    db.add(user)
    db.flush()

    # Seed balances + starter habitat
    db.add(new_game_state(user.id, now))

    # Unique username can still race between the check and the insert
    commit_or_raise(db, conflict=DuplicateUsername(username))
    db.refresh(user)

    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return RegisterResponse(user_id=user.id, username=user.username)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    user = db.query(User).filter(User.username == payload.username.strip()).first()
    if not user or not pwd_context.verify(payload.password, user.password_hash):
        logger.info("Failed login for %r", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    token = secrets.token_hex(32)
    issued = now_utc_naive()
    expires_at = issued + timedelta(hours=SESSION_HOURS)

    sess = SessionToken(
        user_id=user.id,
        token=token,
        created_at=issued,
        expires_at=expires_at,
    )
    db.add(sess)
    commit_or_raise(db)

    return LoginResponse(token=token, expires_at=expires_at, user_id=user.id, username=user.username)


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user_id=current_user.id, username=current_user.username)
