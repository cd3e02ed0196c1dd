"""
FastAPI dependencies for dependency injection.

Pattern: Dependency Injection
- The store gets the request-scoped session from the app's Database
- The service gets the store plus a generator configured from settings
- Tests override ``get_db`` or build their own app with other settings
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from links_app.database.connection import get_db
from links_app.services.link_service import LinkService
from links_app.services.short_code import RandomCodeGenerator
from links_app.storage.link_store import LinkStore, SQLAlchemyLinkStore


def get_code_generator(request: Request) -> RandomCodeGenerator:
    return request.app.state.code_generator


def get_link_store(db: Session = Depends(get_db)) -> LinkStore:
    return SQLAlchemyLinkStore(db)


def get_link_service(
    store: LinkStore = Depends(get_link_store),
    code_generator: RandomCodeGenerator = Depends(get_code_generator),
) -> LinkService:
    """
    Get LinkService with all dependencies injected.
    
    Controllers depend on the service only; the service depends on the
    store and the generator.
    """
    return LinkService(store=store, code_generator=code_generator)
