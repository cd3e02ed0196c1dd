"""
Link storage.

``LinkStore`` is the only place that issues SQL against the ``links`` table.
Driver-specific failures are translated into typed outcomes here so the
service layer never inspects vendor error codes.
"""

from .link_store import ConstraintViolation, LinkStore, SQLAlchemyLinkStore

__all__ = [
    "ConstraintViolation",
    "LinkStore",
    "SQLAlchemyLinkStore",
]
