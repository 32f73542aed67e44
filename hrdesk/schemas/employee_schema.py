# hrdesk/schemas/employee_schema.py
from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import Optional


class EmployeeBrief(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class EmployeeWithSalary(EmployeeBrief):
    salary_amount: Optional[Decimal] = None


class EmployeeFull(EmployeeWithSalary):
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    dob: Optional[date] = None
    aadhar_photo: Optional[str] = None
    pan_photo: Optional[str] = None


class EmployeeProfile(EmployeeWithSalary):
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    dob: Optional[date] = None


class EmployeeProfileOut(BaseModel):
    employee: EmployeeProfile
