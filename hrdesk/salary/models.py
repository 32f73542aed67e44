# hrdesk/salary/models.py

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from hrdesk.database import Base


class Salary(Base):
    __tablename__ = "salary"

    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True)
    month = Column(String(7), primary_key=True)   # YYYY-MM
    paid = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Salary employee_id={self.employee_id} month={self.month} paid={self.paid}>"
