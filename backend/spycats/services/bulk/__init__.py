from .dto import BulkResult, SalaryUpdateIn
from .pool import PoolOutcome, run_pool
from .service import MAX_CAT_CREATES, MAX_SALARY_UPDATES, BulkService

__all__ = [
    "BulkResult",
    "BulkService",
    "MAX_CAT_CREATES",
    "MAX_SALARY_UPDATES",
    "PoolOutcome",
    "SalaryUpdateIn",
    "run_pool",
]
