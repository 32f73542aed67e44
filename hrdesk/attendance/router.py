# hrdesk/attendance/router.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from hrdesk.database import get_db
from hrdesk.attendance.models import Attendance
from hrdesk.employees.models import Employee
from hrdesk.auth.dependencies import require_admin, require_self_or_admin
from hrdesk.schemas.attendance_schema import AttendanceMarkSchema, AttendanceOut
from hrdesk.utils.upsert import upsert_row

logger = logging.getLogger(__name__)

router = APIRouter(tags=["attendance"])


def _history(db: Session, employee_id: int):
    return (
        db.query(Attendance)
        .filter(Attendance.employee_id == employee_id)
        .order_by(Attendance.date.desc())
        .all()
    )


# Mark attendance (insert or overwrite the day's row)
@router.post("/api/attendance", dependencies=[Depends(require_admin)])
def mark_attendance(body: AttendanceMarkSchema, db: Session = Depends(get_db)):
    if not body.employee_id or not body.date or body.present is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee ID, date, and present status are required",
        )

    if not db.query(Employee.id).filter(Employee.id == body.employee_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")

    upsert_row(
        db,
        Attendance,
        {"employee_id": body.employee_id, "date": body.date, "present": body.present},
        {"present": body.present},
    )
    logger.info("Attendance employee=%s date=%s present=%s", body.employee_id, body.date, body.present)
    return {"message": "Attendance marked successfully"}


# Admin view of any employee's attendance
@router.get(
    "/api/attendance/history/{employee_id}",
    response_model=List[AttendanceOut],
    dependencies=[Depends(require_admin)],
)
def attendance_history(employee_id: int, db: Session = Depends(get_db)):
    return _history(db, employee_id)


# Employee's own attendance (admins may read any)
@router.get(
    "/employee/api/attendance/history/{employee_id}",
    response_model=List[AttendanceOut],
    dependencies=[Depends(require_self_or_admin)],
)
def own_attendance_history(employee_id: int, db: Session = Depends(get_db)):
    return _history(db, employee_id)
