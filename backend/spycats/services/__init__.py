"""Service layer.

Application services orchestrate use cases over Units of Work and raise the
framework-agnostic errors from :mod:`spycats.services._shared.errors`.
Import concrete services from their subpackages, e.g.
``from spycats.services.cats import CatService``.
"""
