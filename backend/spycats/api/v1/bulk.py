"""Bulk endpoints (admin only)."""

from __future__ import annotations

from flask import Blueprint

from spycats.api.deps import (
    breed_validator,
    envelope,
    json_response,
    load_json,
    require_role,
    timing,
    translate_service_errors,
)
from spycats.schemas import BulkCatCreateSchema, BulkResultSchema, BulkSalarySchema
from spycats.services._shared.policies.roles import Role
from spycats.services.bulk import BulkService, SalaryUpdateIn
from spycats.services.cats import CatCreateIn

bp = Blueprint("bulk", __name__)

salary_schema = BulkSalarySchema()
create_schema = BulkCatCreateSchema()
result_schema = BulkResultSchema()


@bp.put("/cats/salary")
@require_role(Role.ADMIN)
@timing
@translate_service_errors
def bulk_update_salaries():
    """Apply up to 100 salary changes; failures are reported per item."""

    payload = load_json(salary_schema)
    updates = [
        SalaryUpdateIn(cat_id=item["id"], salary=item["salary"]) for item in payload["updates"]
    ]
    result = BulkService(breeds=breed_validator()).bulk_update_salaries(updates)
    return json_response(envelope(result_schema.dump(result)))


@bp.post("/cats")
@require_role(Role.ADMIN)
@timing
@translate_service_errors
def bulk_create_cats():
    """Hire up to 50 cats; failures are reported per item."""

    payload = load_json(create_schema)
    cats = [CatCreateIn(**item) for item in payload["cats"]]
    result = BulkService(breeds=breed_validator()).bulk_create_cats(cats)
    return json_response(envelope(result_schema.dump(result)))
