# hrdesk/schemas/salary_schema.py
from pydantic import BaseModel, field_validator
from typing import Optional
import re

MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class SalaryMarkSchema(BaseModel):
    employee_id: Optional[int] = None
    month: Optional[str] = None
    paid: Optional[bool] = None

    @field_validator("month")
    @classmethod
    def month_format(cls, v):
        if v is not None and v != "" and not MONTH_RE.match(v):
            raise ValueError("month must look like YYYY-MM")
        return v


class SalaryOut(BaseModel):
    month: str
    paid: bool

    model_config = {"from_attributes": True}


class SalaryStatusOut(BaseModel):
    isPaid: bool
