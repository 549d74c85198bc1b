# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from schemas import user as schemas
from services import credentials
from utils.audit import client_ip, write_log
from utils.errors import ConflictError, UnauthorizedError
from utils.hashing import PasswordHasher
from utils.tokenJWT import TokenService, get_current_user, get_token_service

router = APIRouter(prefix="/auth", tags=["auth"])


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


# Register a new user
@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: schemas.UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    try:
        user = credentials.register(db, hasher, payload.username, payload.password, payload.email)
    except ConflictError:
        write_log(
            db,
            user_id=None,
            action="REGISTER",
            resource="auth",
            status="FAIL",
            ip=client_ip(request),
            meta={"reason": "Username or email exists"},
        )
        raise

    # Log successful registration event
    write_log(
        db,
        user_id=user.id,
        action="REGISTER",
        resource="auth",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"username": user.username},
    )
    return user


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.LoginResponse)
def login(
    payload: schemas.UserLogin,
    request: Request,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        token, user = credentials.login(db, hasher, tokens, payload.username, payload.password)
    except UnauthorizedError:
        write_log(db, user_id=None, action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request))
        raise

    write_log(db, user_id=user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"username": user.username})

    return {"token": token, "user": user}


# Identity carried by the presented token
@router.get("/me", response_model=schemas.TokenClaims)
def me(current_user: schemas.TokenClaims = Depends(get_current_user)):
    return current_user
