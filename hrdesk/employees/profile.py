# hrdesk/employees/profile.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hrdesk.auth.dependencies import Caller, require_employee
from hrdesk.database import get_db
from hrdesk.employees.models import Employee
from hrdesk.schemas.employee_schema import EmployeeProfileOut

router = APIRouter(prefix="/employee/api", tags=["employee self-service"])


@router.get("/profile", response_model=EmployeeProfileOut)
def read_profile(caller: Caller = Depends(require_employee), db: Session = Depends(get_db)):
    """The calling employee's own record (no password or document fields)."""
    emp = db.query(Employee).filter(Employee.id == caller.id).first()
    if not emp:
        raise HTTPException(status_code=404, detail="Employee not found")
    return {"employee": emp}
