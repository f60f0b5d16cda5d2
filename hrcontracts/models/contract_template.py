# =====================================================
# FILE: hrcontracts/models/contract_template.py
# Contract Template Model
# =====================================================

from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, LargeBinary, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from hrcontracts.core.database import Base


class ContractTemplate(Base):
    __tablename__ = "contract_templates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    file_name = Column(String(255), nullable=False)
    content = Column(LargeBinary, nullable=False)
    size_bytes = Column(Integer, nullable=False)
    description = Column(Text)
    version = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=False)
    uploaded_by = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    company = relationship("Company", back_populates="templates")
    contracts = relationship("Contract", back_populates="template")

    def __repr__(self):
        return f"<ContractTemplate(id={self.id}, name={self.name}, v{self.version}, active={self.is_active})>"
