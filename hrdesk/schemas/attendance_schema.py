# hrdesk/schemas/attendance_schema.py
import datetime as dt
from typing import Optional

from pydantic import BaseModel


class AttendanceMarkSchema(BaseModel):
    employee_id: Optional[int] = None
    date: Optional[dt.date] = None
    present: Optional[bool] = None


class AttendanceOut(BaseModel):
    date: dt.date
    present: bool

    model_config = {"from_attributes": True}
