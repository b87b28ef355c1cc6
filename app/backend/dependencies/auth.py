import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.backend.core.config import Settings
from app.backend.core.errors import AuthenticationFailure, InternalFailure
from app.backend.core.tokens import TokenService

log = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    """Strict auth dependency; raises when no/invalid token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationFailure()

    claims = tokens.validate(credentials.credentials)
    if claims is None:
        raise AuthenticationFailure("Invalid or expired token.")

    if claims.user_id is None:
        # a token we signed ourselves without the identity claim
        log.error("Token %s for %r carries no usable userId claim", claims.token_id, claims.username)
        raise InternalFailure()

    request.state.user_id = claims.user_id
    return claims.user_id
