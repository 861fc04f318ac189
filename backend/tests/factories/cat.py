"""Factory Boy definition for :class:`spycats.models.cat.Cat`."""

from __future__ import annotations

import factory
from spycats.models.cat import Cat

from tests.factories import BaseFactory

BREEDS = ("Bengal", "Siamese", "Persian", "Maine Coon", "Russian Blue", "Sphynx")


class CatFactory(BaseFactory):
    class Meta:
        model = Cat

    id = None
    name = factory.Faker("first_name")
    breed = factory.Iterator(BREEDS)
    experience = factory.Faker("random_int", min=0, max=20)
    salary = factory.Faker("pyfloat", min_value=100, max_value=5000, right_digits=2)
