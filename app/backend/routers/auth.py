from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.backend.core.config import Settings
from app.backend.core.tokens import TokenService
from app.db.session import get_session
from app.backend.dependencies.auth import get_settings, get_token_service
from app.backend.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from app.backend.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    user = auth_service.register(
        db,
        username=body.username,
        password=body.password,
        rounds=settings.bcrypt_rounds,
    )
    return RegisterResponse(message="User registered successfully.", user_id=user.id)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
):
    result = auth_service.login(db, tokens, username=body.username, password=body.password)
    return LoginResponse(
        token=result.token,
        username=result.username,
        expires_at=result.expires_at,
    )
