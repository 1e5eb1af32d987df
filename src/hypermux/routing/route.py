"""HTTP method constants and the Route / RouteMatch dataclasses."""

from dataclasses import dataclass, field
from typing import Any

from hypermux.routing.template import PathSegment, parse_template

GET = "GET"
POST = "POST"
PUT = "PUT"
DELETE = "DELETE"
HEAD = "HEAD"
OPTIONS = "OPTIONS"
PATCH = "PATCH"

METHODS: frozenset[str] = frozenset({GET, POST, PUT, DELETE, HEAD, OPTIONS, PATCH})

__all__ = [
    "DELETE",
    "GET",
    "HEAD",
    "METHODS",
    "OPTIONS",
    "PATCH",
    "POST",
    "PUT",
    "PathSegment",
    "Route",
    "RouteMatch",
]


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen (template, method, handler) registration.

    ``sequence`` is the registration index; it breaks ordering ties so
    dispatch stays deterministic for duplicate registrations.
    ``segments`` is parsed from ``template`` at construction.
    """

    template: str
    method: str
    handler: Any
    sequence: int = 0
    segments: tuple[PathSegment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", parse_template(self.template))

    @property
    def composite_key(self) -> str:
        """``[METHOD]template``, the legacy ordering key."""
        return f"[{self.method}]{self.template}"

    @property
    def literal_count(self) -> int:
        return sum(1 for s in self.segments if not s.is_empty and not s.is_capture)

    @property
    def capture_count(self) -> int:
        return sum(1 for s in self.segments if s.is_capture)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
