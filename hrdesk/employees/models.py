from decimal import Decimal

from sqlalchemy import Column, Integer, String, Date, DECIMAL
from hrdesk.database import Base

# salary_amount is DECIMAL(10,2)
SALARY_LIMIT = Decimal("100000000")


def salary_fits(amount: Decimal) -> bool:
    return amount.is_finite() and 0 <= amount < SALARY_LIMIT and amount.as_tuple().exponent >= -2


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), nullable=False, unique=True)
    phone = Column(String(20), nullable=False)

    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)
    dob = Column(Date, nullable=False)

    password = Column(String(255), nullable=False)

    # filenames under UPLOAD_DIR
    aadhar_photo = Column(String(255), nullable=True)
    pan_photo = Column(String(255), nullable=True)

    salary_amount = Column(DECIMAL(10, 2), nullable=True)
    doj = Column(Date, nullable=True)

    def __repr__(self):
        return f"<Employee id={self.id} name={self.name} email={self.email}>"


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True)
    password = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Admin id={self.id} username={self.username}>"
