# hrdesk/salary/router.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from hrdesk.database import get_db
from hrdesk.employees.models import Employee
from hrdesk.salary.models import Salary
from hrdesk.auth.dependencies import require_admin, require_self_or_admin
from hrdesk.schemas.salary_schema import SalaryMarkSchema, SalaryOut, SalaryStatusOut
from hrdesk.utils.upsert import upsert_row

logger = logging.getLogger(__name__)

router = APIRouter(tags=["salary"])


def _history(db: Session, employee_id: int):
    return (
        db.query(Salary)
        .filter(Salary.employee_id == employee_id)
        .order_by(Salary.month.desc())
        .all()
    )


# Save paid/unpaid for one month
@router.post("/api/salary", dependencies=[Depends(require_admin)])
def save_salary(body: SalaryMarkSchema, db: Session = Depends(get_db)):
    if not body.employee_id or not body.month or body.paid is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee ID, month, and paid status are required",
        )

    if not db.query(Employee.id).filter(Employee.id == body.employee_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")

    upsert_row(
        db,
        Salary,
        {"employee_id": body.employee_id, "month": body.month, "paid": body.paid},
        {"paid": body.paid},
    )
    logger.info("Salary employee=%s month=%s paid=%s", body.employee_id, body.month, body.paid)
    return {"message": "Salary status updated successfully"}


@router.get("/api/salary/status/{employee_id}", response_model=SalaryStatusOut, dependencies=[Depends(require_admin)])
def salary_status(employee_id: int, month: Optional[str] = Query(None), db: Session = Depends(get_db)):
    if not month:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Month is required")

    row = db.query(Salary).filter(Salary.employee_id == employee_id, Salary.month == month).first()
    return {"isPaid": bool(row.paid) if row else False}


@router.get("/api/salary/history/{employee_id}", response_model=List[SalaryOut], dependencies=[Depends(require_admin)])
def salary_history(employee_id: int, db: Session = Depends(get_db)):
    return _history(db, employee_id)


@router.get(
    "/employee/api/salary/history/{employee_id}",
    response_model=List[SalaryOut],
    dependencies=[Depends(require_self_or_admin)],
)
def own_salary_history(employee_id: int, db: Session = Depends(get_db)):
    return _history(db, employee_id)
