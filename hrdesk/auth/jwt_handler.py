# hrdesk/auth/jwt_handler.py
# Uses python-jose to create/verify JWTs (compatible with dependencies.py)
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

from jose import jwt, JWTError

from hrdesk.config import get_settings

ALGORITHM = "HS256"


def create_access_token(payload: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    """
    Create a JWT token with an 'exp' claim.
    payload: a dict, e.g. {"id": 4, "role": "employee", "email": "a@b.c"}
    Returns a JWT string.
    """
    settings = get_settings()
    if expires_minutes is None:
        expires_minutes = settings.jwt_expire_minutes
    to_encode = payload.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=ALGORITHM)


def decode_jwt(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT token. Returns payload dict on success, otherwise None.
    Expired tokens fail verification as well.
    """
    if not token:
        return None
    try:
        return jwt.decode(token, get_settings().jwt_secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
