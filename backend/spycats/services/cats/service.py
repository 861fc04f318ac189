"""
CatService
==========

Use cases for the `Cat` aggregate: hiring (with breed validation), listing,
salary changes and removal.
"""

from __future__ import annotations

import logging

from spycats.models.cat import Cat
from spycats.repositories.cat import CatRepository
from spycats.services._shared.base import BaseService, ServiceContext
from spycats.services._shared.dto import PageMeta
from spycats.services._shared.errors import BusinessRuleError, ConflictError, NotFoundError
from spycats.services._shared.ports.breeds import BreedValidator, StaticBreedValidator
from spycats.services.cats.dto import CatCreateIn, CatListIn, CatListOut, CatOut, CatSalaryUpdateIn

log = logging.getLogger(__name__)


class CatService(BaseService):
    """
    Application service for spy cats.

    :param breeds: Breed catalog; defaults to accepting any breed.
    :type breeds: BreedValidator | None
    """

    def __init__(
        self, *, breeds: BreedValidator | None = None, ctx: ServiceContext | None = None
    ) -> None:
        super().__init__(ctx=ctx)
        self.breeds = breeds or StaticBreedValidator()

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create_cat(self, dto: CatCreateIn) -> CatOut:
        """
        Hire a new cat.

        :param dto: Cat attributes.
        :type dto: CatCreateIn
        :returns: Created cat.
        :rtype: CatOut
        :raises BusinessRuleError: ``invalid_breed`` when the breed is unknown.
        """
        if not self.breeds.is_valid(dto.breed):
            raise BusinessRuleError(f"Unknown breed: {dto.breed}", code="invalid_breed")

        with self.rw_uow() as uow:
            repo: CatRepository = uow.cats
            cat = repo.add(
                Cat(
                    name=dto.name.strip(),
                    breed=dto.breed.strip(),
                    experience=dto.experience,
                    salary=dto.salary,
                )
            )
            out = self._to_out(cat)
        log.info("cat created id=%s", out.id)
        return out

    def update_salary(self, cat_id: int, dto: CatSalaryUpdateIn) -> CatOut:
        """
        Change a cat's salary.

        :raises NotFoundError: If the cat does not exist.
        :raises PreconditionFailedError: If ``if_match`` is stale.
        """
        with self.rw_uow() as uow:
            repo: CatRepository = uow.cats
            cat = repo.get_for_update(cat_id)
            if cat is None:
                raise NotFoundError("Cat", cat_id)
            self.ensure_if_match(dto.if_match, cat.compute_etag())
            repo.update(cat, salary=dto.salary)
            # Pick up the server-side updated_at before building the ETag
            repo.session.refresh(cat)
            return self._to_out(cat)

    def delete_cat(self, cat_id: int) -> None:
        """
        Remove a cat; past missions keep their history without a cat.

        :raises NotFoundError: If the cat does not exist.
        :raises ConflictError: ``cat_busy`` while the cat is on an open mission.
        """
        with self.rw_uow() as uow:
            repo: CatRepository = uow.cats
            cat = repo.get_for_update(cat_id)
            if cat is None:
                raise NotFoundError("Cat", cat_id)
            if repo.has_active_mission(cat_id):
                raise ConflictError("Cat", "cat is assigned to an active mission", code="cat_busy")
            repo.detach_from_missions(cat_id)
            repo.delete(cat)
        log.info("cat deleted id=%s", cat_id)

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get_cat(self, cat_id: int) -> CatOut:
        """
        :raises NotFoundError: If the cat does not exist.
        """
        with self.ro_uow() as uow:
            cat = uow.cats.get(cat_id)
            if cat is None:
                raise NotFoundError("Cat", cat_id)
            return self._to_out(cat)

    def list_cats(self, dto: CatListIn) -> CatListOut:
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        with self.ro_uow() as uow:
            page = uow.cats.paginate(pagination, filters=dto.filters)
            items = [self._to_out(cat) for cat in page.items]
        return CatListOut(
            items=items,
            meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
        )

    # --------------------------------------------------------------------- #
    # Mapping
    # --------------------------------------------------------------------- #

    @staticmethod
    def _to_out(cat: Cat) -> CatOut:
        return CatOut(
            id=cat.id,
            name=cat.name,
            breed=cat.breed,
            experience=cat.experience,
            salary=cat.salary,
            created_at=cat.created_at,
            updated_at=cat.updated_at,
            etag=cat.compute_etag(),
        )
