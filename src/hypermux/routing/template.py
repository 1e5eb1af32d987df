"""Template matcher — decides whether a path fits a template.

Templates are ``/``-delimited; a segment wrapped in ``{}`` is a named
capture. Matching is a linear per-segment walk, no regex::

    is_compatible("/users/{id}", "/users/42")   -> True
    extract_params("/users/{id}", "/users/42")  -> {"id": "42"}

Both templates and paths keep their exact segment count: there are no
optional or variadic segments and no trailing-slash normalisation.
Empty segments (leading or doubled slashes) are skipped on either side.
"""

from dataclasses import dataclass

from hypermux.errors import TemplateMismatchError


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route template.

    Literal:  ``users``  (is_capture=False)
    Capture:  ``{id}``   (is_capture=True, name="id")
    Empty:    ``""``     from leading or doubled slashes (is_empty=True)
    """

    value: str
    is_capture: bool = False
    name: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.value


def is_capture(segment: str) -> bool:
    """True if *segment* is a ``{name}`` capture."""
    return len(segment) > 0 and segment[0] == "{" and segment[-1] == "}"


def parse_template(template: str) -> tuple[PathSegment, ...]:
    """Split *template* into segments, keeping empty ones.

    Examples::

        "/users"       -> (PathSegment(""), PathSegment("users"))
        "/users/{id}"  -> (PathSegment(""), PathSegment("users"),
                           PathSegment("{id}", is_capture=True, name="id"))
    """
    segments: list[PathSegment] = []
    for part in template.split("/"):
        if part and is_capture(part):
            segments.append(PathSegment(value=part, is_capture=True, name=part[1:-1]))
        else:
            segments.append(PathSegment(value=part))
    return tuple(segments)


def is_compatible(template: str, path: str) -> bool:
    """Return True if *path* fits *template*."""
    if template == path:
        return True
    if "{" not in template:
        return False

    template_parts = template.split("/")
    path_parts = path.split("/")
    if len(template_parts) != len(path_parts):
        return False

    for template_part, path_part in zip(template_parts, path_parts, strict=True):
        if not template_part or not path_part:
            continue
        if is_capture(template_part):
            continue
        if template_part != path_part:
            return False
    return True


def extract_params(template: str, path: str) -> dict[str, str]:
    """Bind each capture in *template* to the matching segment of *path*.

    Raises ``TemplateMismatchError`` if the segment counts differ or a
    literal segment disagrees. Captures facing an empty path segment are
    skipped, so they are absent from the result.
    """
    template_parts = template.split("/")
    path_parts = path.split("/")
    if len(template_parts) != len(path_parts):
        raise TemplateMismatchError(
            template,
            path,
            f"path has {len(path_parts)} segments, template {template!r} has {len(template_parts)}",
        )

    params: dict[str, str] = {}
    for template_part, path_part in zip(template_parts, path_parts, strict=True):
        if not template_part or not path_part:
            continue
        if is_capture(template_part):
            params[template_part[1:-1]] = path_part
        elif template_part != path_part:
            raise TemplateMismatchError(template, path)
    return params
