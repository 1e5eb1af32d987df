"""Test utilities for hypermux applications.

    from hypermux.testing import TestClient
"""

from hypermux.testing.client import TestClient

__all__ = ["TestClient"]
