# utils/tokenJWT.py
from jose import jwt, JWTError
from datetime import datetime, timedelta
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from errors import Forbidden, InvalidToken
from models.users import User

# The signing scheme is fixed; tokens signed with anything else are rejected
ALGORITHM = "HS256"
USER_ID_CLAIM = "userId"

# Authorization scheme, missing headers are reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)

# Generate a signed access token carrying the user id
def create_access_token(user_id: str, secret: str = None, expires_delta: timedelta = None) -> str:
    to_encode = {USER_ID_CLAIM: user_id}
    if expires_delta is None and settings.ACCESS_TOKEN_EXPIRE_MINUTES:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    if expires_delta is not None:
        to_encode["exp"] = datetime.utcnow() + expires_delta
    return jwt.encode(to_encode, secret or settings.SECRET_KEY, algorithm=ALGORITHM)

# Validate a token and return the user id it was issued for
def decode_access_token(token: str, secret: str = None) -> str:
    try:
        payload = jwt.decode(token, secret or settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise InvalidToken(str(e))

    user_id = payload.get(USER_ID_CLAIM)
    if not isinstance(user_id, str) or not user_id:
        raise InvalidToken("userId not found in token")
    return user_id

# Retrieve the currently authenticated user based on the bearer token
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidToken("Missing bearer token")
    user_id = decode_access_token(credentials.credentials)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise InvalidToken("User not found")
    return user

# Dependency factory for Role-Based Access Control
def role_required(*allowed_roles):
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if allowed_roles and current_user.role not in allowed_roles:
            raise Forbidden()
        return current_user
    return _checker
