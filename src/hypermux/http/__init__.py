"""HTTP primitives: request, response sink, headers and response helpers."""
