"""
pwnedcheck - Check passwords against the Pwned Passwords breach corpus.

Features:
- k-anonymity range queries (only a 5 character hash prefix is sent)
- Synchronous and callback-based asynchronous checks
- Command line front-end
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .breach import (
    BreachChecker,
    Fingerprint,
    LookupResult,
    check_password,
    check_password_async,
    get_fingerprint,
)
from .errors import PwnedCheckError, ProtocolError, TransportError

__all__ = [
    "BreachChecker",
    "Fingerprint",
    "LookupResult",
    "check_password",
    "check_password_async",
    "get_fingerprint",
    "PwnedCheckError",
    "ProtocolError",
    "TransportError",
]
