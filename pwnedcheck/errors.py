"""
errors.py - Exceptions raised by pwnedcheck
"""
from typing import Optional


class PwnedCheckError(Exception):
    """Base class for every error raised by pwnedcheck"""


class TransportError(PwnedCheckError):
    """The range request could not be completed (network failure or bad status)"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ProtocolError(PwnedCheckError):
    """The range response did not follow the SUFFIX:COUNT line format"""
