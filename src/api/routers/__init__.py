"""
API Routers package.
"""

from . import history

__all__ = ["history"]
