# hrdesk/auth/login.py
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from hrdesk.database import get_db
from hrdesk.auth.dependencies import ROLE_ADMIN, ROLE_EMPLOYEE
from hrdesk.auth.jwt_handler import create_access_token
from hrdesk.employees.models import Employee, Admin
from hrdesk.schemas.auth_schema import EmployeeLoginSchema, AdminLoginSchema, TokenOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return generate_password_hash("not-a-real-password")


def _password_matches(stored_hash, password: str) -> bool:
    # unknown users still pay for one hash check so timing doesn't leak existence
    if not stored_hash:
        check_password_hash(_dummy_hash(), password)
        return False
    try:
        return check_password_hash(stored_hash, password)
    except ValueError:
        logger.warning("Stored password hash has an unsupported format")
        return False


def _require_fields(identity_field: str, identity, password):
    label = identity_field.capitalize()
    if not identity and not password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{label} and password are required")
    if not identity:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{label} is required")
    if not password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password is required")


# Employee login
@router.post("/employee/api/login", response_model=TokenOut)
def employee_login(body: EmployeeLoginSchema, db: Session = Depends(get_db)):
    _require_fields("email", body.email, body.password)

    employee = db.query(Employee).filter(Employee.email == body.email).first()
    if not _password_matches(employee.password if employee else None, body.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")

    token = create_access_token({"id": employee.id, "email": employee.email, "role": ROLE_EMPLOYEE})
    logger.info("Employee %s logged in", employee.id)
    return {"token": token}


# Admin login
@router.post("/api/login", response_model=TokenOut)
def admin_login(body: AdminLoginSchema, db: Session = Depends(get_db)):
    _require_fields("username", body.username, body.password)

    admin = db.query(Admin).filter(Admin.username == body.username).first()
    if not _password_matches(admin.password if admin else None, body.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")

    token = create_access_token({"id": admin.id, "username": admin.username, "role": ROLE_ADMIN})
    logger.info("Admin %s logged in", admin.id)
    return {"token": token}
