"""
Auth Router - Account registration, login and removal.

Example Usage:
    POST /auth/register - Create an account and get a token
    POST /auth/login - Exchange credentials for a token
    GET /auth/me - Current user
    DELETE /auth/me - Delete the current user and everything they own
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..api.dto import AuthResponseDTO, LoginRequestDTO, MessageResponseDTO, RegisterRequestDTO, UserDTO
from ..api.mappers import UserMapper
from ..models import User
from ..services.auth_service import AuthService
from .dependencies import get_auth_service, get_current_user, get_db

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=AuthResponseDTO, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequestDTO,
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.
    
    Returns:
        AuthResponseDTO: Bearer token and the created user
    
    Status Codes:
        201: Created
        400: Email already registered or invalid
    """
    user, token = auth.register(db, payload.email, payload.name, payload.password)
    return AuthResponseDTO(token=token, user=UserMapper.to_dto(user))


@router.post("/login", response_model=AuthResponseDTO)
async def login(
    payload: LoginRequestDTO,
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    """
    Log in with email and password.
    
    Status Codes:
        200: Success
        401: Invalid credentials
    """
    user, token = auth.login(db, payload.email, payload.password)
    return AuthResponseDTO(token=token, user=UserMapper.to_dto(user))


@router.get("/me", response_model=UserDTO)
async def me(current_user: User = Depends(get_current_user)):
    return UserMapper.to_dto(current_user)


@router.delete("/me", response_model=MessageResponseDTO)
async def delete_me(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    """Delete the current user with all documents, chat sessions and messages."""
    await auth.delete_user(db, current_user)
    return MessageResponseDTO(message="Account deleted successfully")
