"""
Auth Service - Registration, login and account deletion.
"""
from typing import Tuple

import jwt
from sqlalchemy.orm import Session

from .storage import ContentStorageInterface
from ..api.exceptions import AuthenticationError, ValidationError
from ..core.logging_config import get_logger
from ..core.security import create_access_token, decode_access_token, hash_password, verify_password
from ..models import User

logger = get_logger(__name__)


class AuthService:
    """
    Service for user accounts and bearer tokens.
    """
    
    def __init__(self, storage: ContentStorageInterface):
        self._storage = storage
    
    def register(self, db: Session, email: str, name: str, password: str) -> Tuple[User, str]:
        """
        Create an account.
        
        Returns:
            (user, token)
        
        Raises:
            ValidationError: If the email is already registered
        """
        email = email.strip().lower()
        if "@" not in email:
            raise ValidationError("Invalid email address")
        if db.query(User).filter(User.email == email).first() is not None:
            raise ValidationError("User already exists with this email")
        
        user = User(email=email, name=name.strip(), password_hash=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user, create_access_token(user.id, user.email)
    
    def login(self, db: Session, email: str, password: str) -> Tuple[User, str]:
        """
        Raises:
            AuthenticationError: If the credentials do not match
        """
        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        logger.info(f"User {user.id} logged in")
        return user, create_access_token(user.id, user.email)
    
    def authenticate_token(self, db: Session, token: str) -> User:
        """
        Resolve a bearer token to its user.
        
        Raises:
            AuthenticationError: If the token is invalid, expired or its user is gone
        """
        try:
            payload = decode_access_token(token)
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.PyJWTError:
            raise AuthenticationError("Invalid token")
        
        user = db.get(User, payload.get("sub"))
        if user is None:
            raise AuthenticationError("Invalid token")
        return user
    
    async def delete_user(self, db: Session, user: User) -> None:
        """Delete a user. Documents, sessions and messages cascade."""
        storage_refs = [doc.file_path for doc in user.documents]
        db.delete(user)
        db.commit()
        for ref in storage_refs:
            await self._storage.delete(ref)
        logger.info(f"Deleted user {user.id} and {len(storage_refs)} documents")
