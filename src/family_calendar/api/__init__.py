"""HTTP surface for Family Calendar."""

from .app import create_app

__all__ = ["create_app"]
