from .dto import CatCreateIn, CatListIn, CatListOut, CatOut, CatSalaryUpdateIn
from .service import CatService

__all__ = [
    "CatService",
    "CatCreateIn",
    "CatListIn",
    "CatListOut",
    "CatOut",
    "CatSalaryUpdateIn",
]
