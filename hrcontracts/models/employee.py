# =====================================================
# FILE: hrcontracts/models/employee.py
# Employee and Employment Models
# =====================================================

from sqlalchemy import Column, String, DateTime, Date, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from hrcontracts.core.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255))
    phone = Column(String(50))
    address = Column(Text)
    date_of_birth = Column(Date)
    national_insurance_number = Column(String(20))
    gender = Column(String(20))
    marital_status = Column(String(20))

    emergency_contact_name = Column(String(255))
    emergency_contact_phone = Column(String(50))
    emergency_contact_relationship = Column(String(50))

    passport_number = Column(String(50))
    passport_issue_date = Column(Date)
    passport_expiry_date = Column(Date)
    visa_issue_date = Column(Date)
    visa_expiry_date = Column(Date)
    visa_category = Column(String(100))
    dbs_certificate_number = Column(String(50))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    company = relationship("Company", back_populates="employees")
    employment = relationship("Employment", back_populates="employee", uselist=False)
    contracts = relationship("Contract", back_populates="employee")

    def __repr__(self):
        return f"<Employee(id={self.id}, name={self.first_name} {self.last_name})>"


class Employment(Base):
    __tablename__ = "employments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, unique=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False)

    job_title = Column(String(255))
    department = Column(String(255))
    manager = Column(String(255))
    employment_status = Column(String(50))  # full_time, part_time, contractor
    base_salary = Column(String(50))
    pay_frequency = Column(String(50))
    start_date = Column(Date)
    end_date = Column(Date)
    location = Column(String(255))
    weekly_hours = Column(String(20))
    payment_method = Column(String(50))
    tax_code = Column(String(20))
    benefits = Column(JSON)  # list of benefit names
    status = Column(String(50), default="active")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    employee = relationship("Employee", back_populates="employment")
