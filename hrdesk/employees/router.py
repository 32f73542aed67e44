# hrdesk/employees/router.py
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash

from hrdesk.auth.dependencies import require_admin
from hrdesk.config import Settings, get_settings
from hrdesk.database import get_db
from hrdesk.employees.models import Employee, salary_fits
from hrdesk.schemas.employee_schema import EmployeeBrief, EmployeeFull, EmployeeWithSalary
from hrdesk.utils.uploads import has_file, remove_uploads, save_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["employees"], dependencies=[Depends(require_admin)])

DUPLICATE_EMAIL = "User already exists with this email"


# -------------------- helpers --------------------
def _parse_date(value: str, label: str) -> date:
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {label}")


def _parse_salary(value: Optional[str]) -> Optional[Decimal]:
    if value in (None, "", "None", "null"):
        return None
    try:
        amount = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid salary amount")
    if not salary_fits(amount):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid salary amount")
    return amount


def _get_or_404(db: Session, emp_id: int) -> Employee:
    emp = db.query(Employee).filter(Employee.id == emp_id).first()
    if not emp:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    return emp


# ----------------- Employee CRUD -----------------

# Create employee (multipart)
@router.post("/api/employees")
def create_employee(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    dob: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    salary_amount: Optional[str] = Form(None),
    aadharPhoto: Optional[UploadFile] = File(None),
    panPhoto: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    required = [
        ("name", name), ("email", email), ("phone", phone), ("address", address),
        ("city", city), ("country", country), ("state", state),
        ("date of birth", dob), ("password", password),
        ("Aadhar photo", aadharPhoto if has_file(aadharPhoto) else None),
    ]
    missing = [label for label, value in required if not value]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(missing)}",
        )

    dob_val = _parse_date(dob, "date of birth")
    salary_val = _parse_salary(salary_amount)

    if db.query(Employee.id).filter(Employee.email == email).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_EMAIL)

    stored = [save_upload(aadharPhoto, settings.upload_dir)]
    stored.append(save_upload(panPhoto, settings.upload_dir) if has_file(panPhoto) else None)

    new_emp = Employee(
        name=name,
        email=email,
        phone=phone,
        address=address,
        city=city,
        country=country,
        state=state,
        dob=dob_val,
        aadhar_photo=stored[0],
        pan_photo=stored[1],
        password=generate_password_hash(password),
        salary_amount=salary_val,
    )
    try:
        db.add(new_emp)
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent insert with the same email
        db.rollback()
        remove_uploads(stored, settings.upload_dir)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_EMAIL)
    except Exception:
        db.rollback()
        remove_uploads(stored, settings.upload_dir)
        raise

    db.refresh(new_emp)
    logger.info("Created employee id=%s", new_emp.id)

    result = {"message": "Employee added successfully", "id": new_emp.id}
    if settings.expose_created_password:
        # compatibility switch for clients that display the initial password
        result["password"] = password
    return result


# Basic listing
@router.get("/api/employees", response_model=List[EmployeeWithSalary])
def list_employees(db: Session = Depends(get_db)):
    return db.query(Employee).all()


# Full listing
@router.get("/api/employees/full", response_model=List[EmployeeFull])
def list_employees_full(db: Session = Depends(get_db)):
    return db.query(Employee).all()


# id/name/email only
@router.get("/api/employeesdata", response_model=List[EmployeeBrief])
def list_employees_data(db: Session = Depends(get_db)):
    return db.query(Employee).all()


# Update employee (multipart)
@router.put("/api/employees/{emp_id}")
def update_employee(
    emp_id: int,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    dob: Optional[str] = Form(None),
    salary_amount: Optional[str] = Form(None),
    aadharPhoto: Optional[UploadFile] = File(None),
    panPhoto: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not all([name, email, phone, address, city, country, state, dob]):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")

    dob_val = _parse_date(dob, "date of birth")
    salary_val = _parse_salary(salary_amount)
    emp = _get_or_404(db, emp_id)

    new_aadhar = save_upload(aadharPhoto, settings.upload_dir) if has_file(aadharPhoto) else None
    new_pan = save_upload(panPhoto, settings.upload_dir) if has_file(panPhoto) else None
    replaced = []
    if new_aadhar:
        replaced.append(emp.aadhar_photo)
        emp.aadhar_photo = new_aadhar
    if new_pan:
        replaced.append(emp.pan_photo)
        emp.pan_photo = new_pan

    emp.name = name
    emp.email = email
    emp.phone = phone
    emp.address = address
    emp.city = city
    emp.country = country
    emp.state = state
    emp.dob = dob_val
    emp.salary_amount = salary_val

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        remove_uploads([new_aadhar, new_pan], settings.upload_dir)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_EMAIL)
    except Exception:
        db.rollback()
        remove_uploads([new_aadhar, new_pan], settings.upload_dir)
        raise

    # old files go only once the row points at the new ones
    remove_uploads(replaced, settings.upload_dir)
    logger.info("Updated employee id=%s", emp_id)
    return {"message": "Employee updated successfully"}


# Delete employee
@router.delete("/api/employees/{emp_id}")
def delete_employee(
    emp_id: int,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    emp = _get_or_404(db, emp_id)
    photos = [emp.aadhar_photo, emp.pan_photo]

    db.delete(emp)
    db.commit()

    remove_uploads(photos, settings.upload_dir)
    logger.info("Deleted employee id=%s", emp_id)
    return {"message": "Employee deleted successfully"}
