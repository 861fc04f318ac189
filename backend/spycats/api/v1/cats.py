"""Spy cat endpoints."""

from __future__ import annotations

from flask import Blueprint, url_for

from spycats.api.deps import (
    breed_validator,
    envelope,
    json_response,
    load_json,
    parse_pagination,
    require_auth,
    require_role,
    timing,
    translate_service_errors,
)
from spycats.api.etag import if_match_header, set_response_etag
from spycats.schemas import CatCreateSchema, CatListQuerySchema, CatSalarySchema, CatSchema
from spycats.services._shared.policies.roles import STAFF_ROLES
from spycats.services.cats import CatCreateIn, CatListIn, CatSalaryUpdateIn, CatService

bp = Blueprint("cats", __name__)

cat_schema = CatSchema()
cats_schema = CatSchema(many=True)
create_schema = CatCreateSchema()
salary_schema = CatSalarySchema()
list_query_schema = CatListQuerySchema()


def _service() -> CatService:
    return CatService(breeds=breed_validator())


@bp.get("")
@require_auth
@timing
@translate_service_errors
def list_cats():
    """List cats, optionally filtered by ``breed``."""

    pagination, filters = parse_pagination(list_query_schema)
    query = CatListIn(pagination=pagination.to_dto(), filters=filters or None)
    result = _service().list_cats(query)
    return json_response(envelope(cats_schema.dump(result.items), meta=result.meta))


@bp.get("/<int:cat_id>")
@require_auth
@timing
@translate_service_errors
def get_cat(cat_id: int):
    cat = _service().get_cat(cat_id)
    return set_response_etag(json_response(envelope(cat_schema.dump(cat))), cat)


@bp.post("")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def create_cat():
    """Hire a cat; the breed must exist in the breed catalog."""

    payload = load_json(create_schema)
    cat = _service().create_cat(CatCreateIn(**payload))
    response = json_response(envelope(cat_schema.dump(cat)), status=201)
    response.headers["Location"] = url_for("cats.get_cat", cat_id=cat.id)
    return set_response_etag(response, cat)


@bp.put("/<int:cat_id>/salary")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def update_salary(cat_id: int):
    """Change a cat's salary; honours ``If-Match``."""

    payload = load_json(salary_schema)
    cat = _service().update_salary(
        cat_id, CatSalaryUpdateIn(salary=payload["salary"], if_match=if_match_header())
    )
    return set_response_etag(json_response(envelope(cat_schema.dump(cat))), cat)


@bp.delete("/<int:cat_id>")
@require_role(*STAFF_ROLES)
@timing
@translate_service_errors
def delete_cat(cat_id: int):
    _service().delete_cat(cat_id)
    return "", 204
