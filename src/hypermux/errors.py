"""Hypermux exception hierarchy.

Shared across the matcher, router, mux, and middleware so every module
raises and catches the same types.
"""


class HypermuxError(Exception):
    """Base for all hypermux-specific errors."""


class ConfigurationError(HypermuxError):
    """Raised when mux configuration is invalid.

    Typically surfaces while building the ``Router`` at construction time.
    """


class TemplateMismatchError(HypermuxError):
    """A path does not fit a template during parameter extraction.

    Raised by ``extract_params`` when segment counts differ or a literal
    segment disagrees. The router treats it as "no match".
    """

    def __init__(self, template: str, path: str, detail: str = "") -> None:
        self.template = template
        self.path = path
        self.detail = detail or f"template {template!r} not compatible with path {path!r}"
        super().__init__(self.detail)
