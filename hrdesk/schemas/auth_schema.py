# hrdesk/schemas/auth_schema.py
from pydantic import BaseModel
from typing import Optional


# fields are optional so the handlers can answer with field-specific 400s
class EmployeeLoginSchema(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminLoginSchema(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class TokenOut(BaseModel):
    token: str
