"""
Short code generation and validation.

Generation is random and not collision-free on its own; the bounded retry in
``RandomCodeGenerator`` plus the unique constraint in the store together
guarantee uniqueness.
"""

import re
import secrets
import string
from typing import Callable

from pydantic import AnyUrl, TypeAdapter, ValidationError


CODE_ALPHABET = string.ascii_letters + string.digits
CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")

# Path segments owned by the API itself; never treated as redirect codes
RESERVED_CODES = frozenset({"api", "healthz", "docs", "redoc", "openapi.json"})

_url_adapter = TypeAdapter(AnyUrl)


def validate_url(candidate) -> bool:
    """
    True iff ``candidate`` is an absolute URL with a scheme and a host.
    
    A bare domain such as ``example.com`` has no scheme and is rejected.
    """
    if not isinstance(candidate, str) or not candidate.strip():
        return False
    try:
        url = _url_adapter.validate_python(candidate)
    except ValidationError:
        return False
    return bool(url.scheme and url.host)


def validate_code(candidate) -> bool:
    """True iff ``candidate`` is exactly 6 to 8 characters of ``[A-Za-z0-9]``."""
    # fullmatch: "$" alone would accept a trailing newline
    return isinstance(candidate, str) and CODE_PATTERN.fullmatch(candidate) is not None


def is_reserved_code(candidate: str) -> bool:
    # Exact match: routes are case-sensitive, so "HealthZ" is an ordinary code
    return candidate in RESERVED_CODES


def generate_code(length: int = 6) -> str:
    """Uniformly random code over the 62-character alphabet."""
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))


class RandomCodeGenerator:
    """
    Random allocation with a bounded number of existence checks.
    
    Pros: unpredictable codes, no coordination needed between processes
    Cons: needs a store read per attempt; the insert can still collide
    """

    def __init__(self, length: int = 6, max_attempts: int = 10):
        self.length = length
        self.max_attempts = max_attempts

    def allocate(self, exists: Callable[[str], bool]) -> str:
        """
        Return the first drawn code for which ``exists`` is False.
        
        If every one of ``max_attempts`` draws is taken, the last draw is
        returned anyway: the insert and its unique constraint have the final
        say, and exhausting the attempts is not an error by itself.
        """
        code = generate_code(self.length)
        for _ in range(self.max_attempts):
            if not is_reserved_code(code) and not exists(code):
                return code
            code = generate_code(self.length)
        return code
