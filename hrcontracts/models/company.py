# =====================================================
# FILE: hrcontracts/models/company.py
# Company Model
# =====================================================

from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from hrcontracts.core.database import Base


class Company(Base):
    """
    Company/Organization Model
    """
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    industry = Column(String(100))
    size = Column(String(50))
    address = Column(Text)
    phone = Column(String(50))
    email = Column(String(255))
    website = Column(String(255))
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    employees = relationship("Employee", back_populates="company")
    templates = relationship("ContractTemplate", back_populates="company")

    def __repr__(self):
        return f"<Company(id={self.id}, name={self.name})>"
