"""
Database models for the link shortener.

A single entity: ``Link``. Click tracking is a raw counter on the row itself.
"""

from .link import Link

__all__ = ["Link"]
