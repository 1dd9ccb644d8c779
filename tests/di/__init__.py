"""Mock providers for testing."""

from .store import MockStoreProvider
from .container import build_test_container

__all__ = [
    "MockStoreProvider",
    "build_test_container",
]
