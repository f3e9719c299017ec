# src/__init__.py — v1
"""bialign: bilingual alignment scoring engine."""

from bialign.version import __version__

__all__ = ["__version__"]
