"""
Triggered job run history.
"""

__version__ = "1.0.0"
