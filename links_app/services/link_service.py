import logging
from typing import List, Optional

from links_app.exceptions import CodeConflict, InvalidCodeFormat, InvalidURL, NotFound
from links_app.models.link import Link
from links_app.services.short_code import (
    RandomCodeGenerator,
    is_reserved_code,
    validate_code,
    validate_url,
)
from links_app.storage.link_store import ConstraintViolation, LinkStore

logger = logging.getLogger(__name__)


class LinkService:
    """
    Link service with the store and code generator injected.
    
    - Store is request-scoped (one session per request)
    - Generator is stateless and shared
    
    Every failure the caller should see is raised as a ``LinkError``
    subclass; the API layer maps them to status codes.
    """

    def __init__(self, store: LinkStore, code_generator: Optional[RandomCodeGenerator] = None):
        self.store = store
        self.code_generator = code_generator or RandomCodeGenerator()

    def create(self, target_url: Optional[str], custom_code: Optional[str] = None) -> Link:
        """Create a new short link
        
        Validation happens before anything is written. With a custom code the
        insert itself is the uniqueness check; without one, a random code is
        allocated with a bounded number of existence checks and then inserted
        regardless, so a collision on that final insert surfaces as
        ``CodeConflict`` instead of being retried.
        """
        if not validate_url(target_url):
            raise InvalidURL()

        if custom_code:
            if not validate_code(custom_code):
                raise InvalidCodeFormat()
            if is_reserved_code(custom_code):
                raise InvalidCodeFormat(f"Code '{custom_code}' is reserved")
            code = custom_code
        else:
            code = self.code_generator.allocate(self.store.exists)

        try:
            link = self.store.insert(code, target_url)
        except ConstraintViolation:
            logger.info("Code conflict on create: %s", code)
            raise CodeConflict()

        logger.info("Created link %s -> %s", link.code, link.target_url)
        return link

    def list_links(self) -> List[Link]:
        """All links, newest first. No pagination."""
        return self.store.list_all()

    def get(self, code: str) -> Link:
        link = self.store.get(code)
        if link is None:
            raise NotFound()
        return link

    def delete(self, code: str) -> str:
        """Delete a link and return its code."""
        deleted = self.store.delete(code)
        if deleted is None:
            raise NotFound()
        logger.info("Deleted link %s", deleted)
        return deleted

    def resolve_redirect(self, code: str) -> str:
        """
        Count a click and return where to send the visitor.
        
        The increment and the lookup are one statement in the store, and it
        is committed before this returns. Reserved path segments are refused
        without touching the store.
        """
        if is_reserved_code(code):
            raise NotFound()

        target_url = self.store.record_click(code)
        if target_url is None:
            raise NotFound()
        return target_url
