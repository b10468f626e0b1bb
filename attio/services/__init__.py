from attio.services.base_service import BaseService, ImportResult, TransactionError
from attio.services.batch_service import BatchResult, BatchService
from attio.services.company_service import CompanyService
from attio.services.person_service import PersonService

__all__ = [
    "BaseService",
    "BatchResult",
    "BatchService",
    "CompanyService",
    "ImportResult",
    "PersonService",
    "TransactionError",
]
