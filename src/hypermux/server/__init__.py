"""Server glue — ASGI response sending and the pounce runner."""
