from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from schoolquiz.config import Settings, get_settings, settings
from schoolquiz.database import Database, get_db, USERS
from schoolquiz.errors import Unauthorized, Forbidden
from schoolquiz.models.user import STUDENT, TEACHER
from typing import Optional
import jwt
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

def verify_token(token: str, config: Settings = settings) -> Optional[str]:
    """Verify a Supabase-issued JWT and return its subject (the user id)"""
    try:
        payload = jwt.decode(
            token,
            config.jwt_secret.get_secret_value(),
            algorithms=[config.jwt_algorithm],
            audience=config.jwt_audience,
        )
    except jwt.PyJWTError as e:
        logger.warning(f"Token verification failed: {e}")
        return None
    return payload.get("sub")

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Database = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """Resolve the caller from the bearer token and the users table"""
    if not credentials:
        raise Unauthorized("Not authorized, no token")

    user_id = verify_token(credentials.credentials, config)
    if not user_id:
        raise Unauthorized("Not authorized, token failed")

    users = db.select(USERS, "*", {"id": user_id})
    if not users:
        raise Unauthorized("Not authorized, user not found")

    user = users[0]
    return {
        "id": str(user["id"]),
        "username": user.get("username"),
        "email": user.get("email"),
        "role": user.get("role") or STUDENT,
    }

def is_teacher(user: dict) -> bool:
    return user.get("role") == TEACHER

async def require_teacher(current_user: dict = Depends(get_current_user)):
    """Role gate for quiz authoring routes"""
    if not is_teacher(current_user):
        raise Forbidden("Not authorized as a teacher")
    return current_user
