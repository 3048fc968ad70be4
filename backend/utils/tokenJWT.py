# utils/tokenJWT.py
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.users import User, is_admin
from utils.errors import AuthError, AuthorizationError

# Authorization scheme; missing headers are reported as AuthError, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)

# Generate a new JWT access token
def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

# Retrieve the currently authenticated user based on the JWT token
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    if credentials is None:
        raise AuthError("Not authenticated")

    try:
        payload = jwt.decode(credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        email: str = payload.get("sub")
    except JWTError:
        raise AuthError("Could not validate credentials")

    # Ensure email is present in the token payload
    if email is None:
        raise AuthError("Could not validate credentials")

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise AuthError("Could not validate credentials")
    return user

# Guard for back-office endpoints
def admin_required(current_user: User = Depends(get_current_user)) -> User:
    if not is_admin(current_user):
        raise AuthorizationError("Admin access required")
    return current_user
