# hrdesk/attendance/models.py

from sqlalchemy import Column, Integer, Date, Boolean, ForeignKey
from hrdesk.database import Base


class Attendance(Base):
    __tablename__ = "attendance"

    # one row per employee per day
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True)
    date = Column(Date, primary_key=True)
    present = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Attendance employee_id={self.employee_id} date={self.date} present={self.present}>"
