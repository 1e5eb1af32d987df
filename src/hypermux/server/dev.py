"""Serve a Mux with the pounce ASGI server.

Requires the ``server`` extra (``pip install hypermux[server]``).
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start a pounce server with the given Mux.

    Pounce's ``run()`` takes an import string (e.g. ``"myapp:mux"``),
    but we hold a live ``Mux`` object, so ``pounce.Server`` is used
    directly with the ASGI callable.

    Args:
        app: ASGI callable (a finalized Mux).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count.
        reload: Enable auto-reload on file changes.
        log_level: Server log level (e.g. ``"debug"``, ``"info"``).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app)
    server.run()
