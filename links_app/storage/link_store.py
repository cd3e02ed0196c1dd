"""
Link store strategies using Strategy Pattern.

The service depends on the ``LinkStore`` interface; ``SQLAlchemyLinkStore``
is the implementation used by the app (SQLite in development and tests,
PostgreSQL in production).
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from links_app.exceptions import TransientStoreError
from links_app.models.link import Link, utcnow

logger = logging.getLogger(__name__)


class ConstraintViolation(Exception):
    """An insert was rejected by the unique constraint on ``links.code``."""

    def __init__(self, code: str):
        super().__init__(f"Code {code!r} violates the unique constraint")
        self.code = code


class LinkStore(ABC):
    """
    Abstract base class for link persistence.
    
    All mutating methods commit before returning, so each call is one
    transaction and no partial write is ever visible.
    """

    @abstractmethod
    def exists(self, code: str) -> bool:
        """Whether a link with ``code`` is currently stored."""
        pass

    @abstractmethod
    def insert(self, code: str, target_url: str) -> Link:
        """
        Persist a new link.
        
        Raises:
            ConstraintViolation: ``code`` is already taken
        """
        pass

    @abstractmethod
    def list_all(self) -> List[Link]:
        """All links, newest first."""
        pass

    @abstractmethod
    def get(self, code: str) -> Optional[Link]:
        pass

    @abstractmethod
    def delete(self, code: str) -> Optional[str]:
        """Remove the link and return its code, or None if nothing matched."""
        pass

    @abstractmethod
    def record_click(self, code: str) -> Optional[str]:
        """
        Count one redirect and return the target URL, atomically.
        
        Returns None if no link has ``code``.
        """
        pass


class SQLAlchemyLinkStore(LinkStore):
    """
    SQLAlchemy implementation backed by a request-scoped session.
    
    Concurrency is left to the database: uniqueness is enforced by the
    constraint on ``code`` and click counting is a single
    ``UPDATE ... RETURNING`` statement, so concurrent redirects for the same
    code never lose an increment.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
        except (OperationalError, PoolTimeoutError, DisconnectionError) as e:
            self.db.rollback()
            logger.warning("Store unavailable: %s", e)
            raise TransientStoreError() from e
        except Exception:
            self.db.rollback()
            raise

    def exists(self, code: str) -> bool:
        with self._transaction():
            found = self.db.execute(
                select(Link.id).where(Link.code == code)
            ).first()
        return found is not None

    def insert(self, code: str, target_url: str) -> Link:
        link = Link(
            code=code,
            target_url=target_url,
            total_clicks=0,
            last_clicked=None,
            created_at=utcnow(),
        )
        with self._transaction():
            self.db.add(link)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise ConstraintViolation(code) from e
            self.db.refresh(link)
        return link

    # Clicks are counted with a bulk UPDATE, so reads refresh any row already
    # held by the session instead of trusting its cached counters

    def list_all(self) -> List[Link]:
        with self._transaction():
            rows = self.db.scalars(
                select(Link)
                .order_by(Link.created_at.desc(), Link.id.desc())
                .execution_options(populate_existing=True)
            ).all()
        return list(rows)

    def get(self, code: str) -> Optional[Link]:
        with self._transaction():
            return self.db.scalars(
                select(Link)
                .where(Link.code == code)
                .execution_options(populate_existing=True)
            ).first()

    def delete(self, code: str) -> Optional[str]:
        stmt = (
            delete(Link)
            .where(Link.code == code)
            .returning(Link.code)
            .execution_options(synchronize_session=False)
        )
        with self._transaction():
            deleted = self.db.execute(stmt).scalar_one_or_none()
            self.db.commit()
        return deleted

    def record_click(self, code: str) -> Optional[str]:
        stmt = (
            update(Link)
            .where(Link.code == code)
            .values(
                total_clicks=Link.total_clicks + 1,
                last_clicked=utcnow(),
            )
            .returning(Link.target_url)
            .execution_options(synchronize_session=False)
        )
        with self._transaction():
            target_url = self.db.execute(stmt).scalar_one_or_none()
            self.db.commit()
        return target_url
