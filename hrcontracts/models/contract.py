# =====================================================
# FILE: hrcontracts/models/contract.py
# Generated Contract Model
# =====================================================

from sqlalchemy import Column, String, DateTime, LargeBinary, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
import uuid

from hrcontracts.core.database import Base


class ContractStatus(str, enum.Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    EXPIRED = "expired"


class Contract(Base):
    """A generated contract document. Content never changes after creation."""
    __tablename__ = "contracts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    template_id = Column(String(36), ForeignKey("contract_templates.id"))
    template_name = Column(String(255), nullable=False)
    file_name = Column(String(255), nullable=False)
    content = Column(LargeBinary, nullable=False)
    status = Column(String(20), nullable=False, default=ContractStatus.ACTIVE.value)
    generated_at = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    employee = relationship("Employee", back_populates="contracts")
    template = relationship("ContractTemplate", back_populates="contracts")

    def __repr__(self):
        return f"<Contract(id={self.id}, employee={self.employee_id}, status={self.status})>"
