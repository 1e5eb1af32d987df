"""Ordered route table with linear first-match lookup.

Routes are kept sorted on every insertion; lookup walks the table in
order and returns the first route whose method and template both fit.

Two ordering policies:

``"specificity"`` (default)
    More literal segments first, then fewer captures, then registration
    order. A literal route always beats a capture route of the same
    shape: ``/users/me`` is tried before ``/users/{id}``.

``"key_length"``
    Longer ``[METHOD]template`` strings first, then registration order.
    Cheap, but only a proxy for specificity: ``/{organization}`` sorts
    ahead of ``/about``.
"""

import bisect
import logging
from collections.abc import Callable
from typing import Any

from hypermux.errors import ConfigurationError, TemplateMismatchError
from hypermux.routing.route import Route, RouteMatch
from hypermux.routing.template import extract_params, is_compatible

logger = logging.getLogger("hypermux.router")


def _specificity_key(route: Route) -> tuple[int, int, int]:
    return (-route.literal_count, route.capture_count, route.sequence)


def _key_length_key(route: Route) -> tuple[int, int]:
    return (-len(route.composite_key), route.sequence)


ORDERINGS: dict[str, Callable[[Route], Any]] = {
    "specificity": _specificity_key,
    "key_length": _key_length_key,
}


class Router:
    """Ordered route table.

    Usage::

        router = Router()
        router.add(Route("/users", "GET", handler, sequence=0))
        router.add(Route("/users/{id}", "GET", handler, sequence=1))
        match = router.match("GET", "/users/42")

    ``add`` is not synchronized; finish registering before the first
    ``match`` from another thread or task.
    """

    __slots__ = ("_key", "_order", "_routes")

    def __init__(self, order: str = "specificity") -> None:
        if order not in ORDERINGS:
            allowed = ", ".join(sorted(ORDERINGS))
            msg = f"Unknown route order {order!r}. Expected one of: {allowed}."
            raise ConfigurationError(msg)
        self._order = order
        self._key = ORDERINGS[order]
        self._routes: list[Route] = []

    @property
    def order(self) -> str:
        return self._order

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in lookup order."""
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def add(self, route: Route) -> None:
        """Insert *route* at its ranked position."""
        bisect.insort(self._routes, route, key=self._key)

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route fitting *method* and *path*, or None.

        A template that is compatible but fails extraction counts as no
        match for that route; the scan continues.
        """
        for route in self._routes:
            if route.method != method or not is_compatible(route.template, path):
                continue
            try:
                params = extract_params(route.template, path)
            except TemplateMismatchError as exc:
                logger.debug("skipping %s: %s", route.composite_key, exc)
                continue
            return RouteMatch(route=route, path_params=params)
        logger.debug("no route matches %s %s", method, path)
        return None
