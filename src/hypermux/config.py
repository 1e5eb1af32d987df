"""Mux configuration.

MuxConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MuxConfig:
    """Mux configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MuxConfig(port=3000, route_order="key_length")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1

    # Routing
    # "specificity": literal segments desc, captures asc, registration order.
    # "key_length": "[METHOD]template" length desc, registration order.
    route_order: str = "specificity"
    not_found_body: str = "not found"

    # Logging
    log_level: str = "info"
