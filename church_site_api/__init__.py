"""
Top‑level package for the Church Site API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
