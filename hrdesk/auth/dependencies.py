# hrdesk/auth/dependencies.py
from dataclasses import dataclass
from typing import Optional
import logging

from fastapi import Header, HTTPException, Depends, status

from hrdesk.auth.jwt_handler import decode_jwt

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"


@dataclass(frozen=True)
class Caller:
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


# -------------------------------------------
# Helper: accept "Bearer <token>" or the raw token
# -------------------------------------------
def _extract_token(auth_header: str) -> str:
    auth_header = auth_header.strip()
    if auth_header[:7].lower() == "bearer ":
        return auth_header[7:].strip()
    return auth_header


# -------------------------------------------
# Strict JWT-only dependency
# -------------------------------------------
def get_current_caller(authorization: Optional[str] = Header(None)) -> Caller:
    if not authorization:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No token provided")

    payload = decode_jwt(_extract_token(authorization))
    if payload is None:
        logger.warning("Rejected invalid or expired token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    role = payload.get("role")
    try:
        caller_id = int(payload.get("id"))
    except (TypeError, ValueError):
        caller_id = None

    if caller_id is None or role not in (ROLE_ADMIN, ROLE_EMPLOYEE):
        logger.warning("Token payload missing id/role: keys=%s", sorted(payload.keys()))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    logger.debug("Authenticated caller id=%s role=%s", caller_id, role)
    return Caller(id=caller_id, role=role)


def require_admin(caller: Caller = Depends(get_current_caller)) -> Caller:
    if not caller.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return caller


def require_employee(caller: Caller = Depends(get_current_caller)) -> Caller:
    if caller.role != ROLE_EMPLOYEE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return caller


def require_self_or_admin(employee_id: int, caller: Caller = Depends(get_current_caller)) -> Caller:
    """Employees may only read their own records; admins may read any."""
    if caller.id != employee_id and not caller.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return caller
