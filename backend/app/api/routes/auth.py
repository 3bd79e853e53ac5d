from typing import Optional
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from pymongo.database import Database
from app.core.database import get_db
from app.api.dependencies import unwrap
from app.services.auth_service import auth_service

router = APIRouter(tags=["auth"])


# Fields are optional so missing input reaches the service checks
# (and gets their messages) instead of FastAPI's 422
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    photoURL: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class GoogleLoginRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    photoURL: Optional[str] = None


class TokenResponse(BaseModel):
    message: str
    token: str


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Database = Depends(get_db)):
    """Register a new user with email and password"""
    return unwrap(auth_service.register(
        db,
        name=payload.name,
        email=payload.email,
        photo_url=payload.photoURL,
        password=payload.password
    ))


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Database = Depends(get_db)):
    """Login and get a session token"""
    return unwrap(auth_service.login(db, email=payload.email, password=payload.password))


@router.post("/google-login", response_model=TokenResponse)
def google_login(payload: GoogleLoginRequest, db: Database = Depends(get_db)):
    """Login with a Google identity, creating the account on first use"""
    return unwrap(auth_service.google_login(
        db,
        name=payload.name,
        email=payload.email,
        photo_url=payload.photoURL
    ))
