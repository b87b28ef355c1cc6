from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.backend.core.errors import AuthenticationFailure, Conflict
from app.backend.core.passwords import hash_password, verify_password
from app.backend.core.tokens import TokenService
from app.backend.models.user import User

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password."
USERNAME_TAKEN = "Username already exists."


@dataclass(frozen=True)
class LoginResult:
    token: str
    username: str
    expires_at: datetime


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.exec(select(User).where(User.username == username)).first()


def register(db: Session, *, username: str, password: str, rounds: int = 12) -> User:
    """
    Create a user with a bcrypt-hashed password.
    Raises Conflict when the username is taken (exact, case-sensitive match).
    """
    if get_user_by_username(db, username) is not None:
        raise Conflict(USERNAME_TAKEN)

    user = User(username=username, password_hash=hash_password(password, rounds=rounds))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration of the same name
        db.rollback()
        raise Conflict(USERNAME_TAKEN)
    db.refresh(user)

    log.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def login(db: Session, tokens: TokenService, *, username: str, password: str) -> LoginResult:
    """
    Verify credentials and issue an access token.
    Unknown user and wrong password fail with the same message.
    """
    user = get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        log.info("Failed login for %s", username)
        raise AuthenticationFailure(INVALID_CREDENTIALS)

    issued = tokens.issue(user)
    log.info("Login: %s (id=%s)", user.username, user.id)
    return LoginResult(token=issued.token, username=user.username, expires_at=issued.expires_at)
