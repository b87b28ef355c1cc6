from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Protocol
from uuid import uuid4

from jose import JWTError, jwt

from app.backend.core.config import Settings

log = logging.getLogger(__name__)

USER_ID_CLAIM = "userId"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class TokenSubject(Protocol):
    id: Optional[int]
    username: str


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    # None when the userId claim is missing or not an integer
    user_id: Optional[int]
    username: Optional[str]
    token_id: Optional[str]
    expires_at: datetime


class TokenService:
    """
    Issues and validates HMAC-signed access tokens.

    Validation is purely cryptographic and time based: there is no
    server-side session or revocation list, so rotating the secret is
    the only way to invalidate outstanding tokens.
    """

    def __init__(self, settings: Settings, clock: Clock | None = None) -> None:
        self._secret = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._ttl = timedelta(minutes=settings.access_token_expire_minutes)
        self._clock = clock or _utcnow

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user: TokenSubject) -> IssuedToken:
        if user.id is None:
            raise ValueError("cannot issue a token for an unsaved user")
        now = self._clock()
        # exp is stored with second precision; report the same instant to callers
        exp = int((now + self._ttl).timestamp())
        payload: Dict[str, Any] = {
            "sub": user.username,
            "jti": uuid4().hex,
            USER_ID_CLAIM: str(user.id),
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(now.timestamp()),
            "exp": exp,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_at=datetime.fromtimestamp(exp, tz=timezone.utc))

    def _decode(self, token: str) -> Dict[str, Any]:
        # jose checks exp against the wall clock, so expiry is checked below
        # against our clock instead. require_exp would switch jose's check back on.
        # aud/iss are only enforced by jose when required.
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            audience=self._audience,
            issuer=self._issuer,
            options={"verify_exp": False, "require_aud": True, "require_iss": True},
        )
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise JWTError("Invalid exp claim")
        if self._clock().timestamp() >= exp:
            raise JWTError("Signature has expired")
        return payload

    def validate(self, token: str) -> Optional[TokenClaims]:
        """Return the token's claims, or None when it must not be trusted."""
        try:
            payload = self._decode(token)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (JWTError, ValueError, TypeError, OverflowError, OSError) as exc:
            log.debug("Rejected token: %s", exc)
            return None

        return TokenClaims(
            user_id=_parse_user_id(payload.get(USER_ID_CLAIM)),
            username=payload.get("sub"),
            token_id=payload.get("jti"),
            expires_at=expires_at,
        )


def _parse_user_id(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and re.fullmatch(r"-?[0-9]+", raw.strip()):
        return int(raw)
    return None
