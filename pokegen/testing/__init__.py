"""Testing utilities for PokeGen."""

from .factory import CreatureFactory, PayloadFactory
from .fixtures import app_fixture, memory_app
from .stubs import GatedProvider, StubProvider, StubTextGenerator
from .test_client import TestClient

__all__ = [
    "CreatureFactory",
    "PayloadFactory",
    "app_fixture",
    "memory_app",
    "GatedProvider",
    "StubProvider",
    "StubTextGenerator",
    "TestClient",
]
