# =====================================================
# FILE: hrcontracts/models/__init__.py
# =====================================================

from hrcontracts.core.database import Base

from hrcontracts.models.company import Company
from hrcontracts.models.employee import Employee, Employment
from hrcontracts.models.contract_template import ContractTemplate
from hrcontracts.models.contract import Contract, ContractStatus

__all__ = [
    "Base",
    "Company",
    "Employee",
    "Employment",
    "ContractTemplate",
    "Contract",
    "ContractStatus",
]
