"""
breach.py - Check passwords against the Pwned Passwords corpus
Uses k-anonymity: only the first 5 characters of the SHA-1 hash ever leave the machine
"""
import hashlib
import logging
import re
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

import requests

from .errors import ProtocolError, TransportError

API_HOST = "api.pwnedpasswords.com"
RANGE_URL = f"https://{API_HOST}/range/"
PREFIX_LENGTH = 5
HASH_LENGTH = 40
USER_AGENT = "pwnedcheck-python"

_COUNT_RE = re.compile(r"^[0-9]+$")

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fingerprint:
    """SHA-1 of a password split into the public prefix and the full digest"""
    full: str
    prefix: str

    @property
    def suffix(self) -> str:
        return self.full[len(self.prefix):]


@dataclass(frozen=True)
class LookupResult:
    """
    Outcome of a range lookup.

    found=False only means the password is not in the corpus,
    not that it is a good password.
    """
    found: bool
    observed_count: int = 0

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(found=False, observed_count=0)


@dataclass(frozen=True)
class RangeEntry:
    suffix: str
    count: int


def get_fingerprint(password: Union[str, bytes]) -> Fingerprint:
    """
    Hash a password the way the range API expects.

    Strings are encoded as UTF-8 with no normalisation; bytes are hashed as-is.
    """
    data = password if isinstance(password, bytes) else password.encode('utf-8')
    full = hashlib.sha1(data).hexdigest().upper()
    return Fingerprint(full=full, prefix=full[:PREFIX_LENGTH])


def parse_range_response(body: str) -> List[RangeEntry]:
    """
    Parse a range response body into entries, in the order received.

    Every non-blank line must be SUFFIX:COUNT, otherwise ProtocolError is raised.
    """
    entries = []
    # Only CRLF and bare LF delimit records
    for lineno, raw in enumerate(body.split("\n"), 1):
        line = raw.rstrip("\r").strip(" \t")
        if not line:
            continue

        suffix, sep, count = line.partition(':')
        if not sep:
            raise ProtocolError(f"line {lineno}: missing ':' separator")
        count = count.strip()
        if not _COUNT_RE.match(count):
            raise ProtocolError(f"line {lineno}: count {count!r} is not a decimal integer")

        entries.append(RangeEntry(suffix=suffix.strip(), count=int(count)))
    return entries


def match_fingerprint(fingerprint: Fingerprint, entries: List[RangeEntry]) -> LookupResult:
    """Scan entries for the one whose prefix + suffix equals the full hash"""
    for entry in entries:
        if fingerprint.prefix + entry.suffix == fingerprint.full:
            return LookupResult(found=True, observed_count=entry.count)
    return LookupResult.not_found()


class BreachChecker:
    """Check passwords against breaches using the Pwned Passwords range API"""

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None,
                 user_agent: str = USER_AGENT):
        """
        Args:
            session: Optional requests session to send the request through
            timeout: Seconds to wait for the API; None waits indefinitely
            user_agent: Value of the User-Agent header (required by the API)
        """
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout!r}")
        self.session = session
        self.timeout = timeout
        self.headers = {
            'User-Agent': user_agent,
            'Accept': 'text/plain',
        }

    def fetch_range(self, prefix: str) -> str:
        """
        Request every known hash suffix sharing this prefix.

        Raises:
            TransportError: network failure or a non-2xx status
        """
        url = f"{RANGE_URL}{prefix}"
        get = self.session.get if self.session is not None else requests.get

        LOG.debug("Requesting range %s", prefix)
        try:
            response = get(url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            body = response.text
        except requests.exceptions.RequestException as e:
            LOG.warning("Range request for %s failed: %s", prefix, e)
            raise TransportError(f"Could not query range {prefix}: {e}", cause=e) from e

        # raise_for_status lets 1xx and 3xx through
        if not 200 <= response.status_code < 300:
            LOG.warning("Range request for %s returned status %s", prefix, response.status_code)
            raise TransportError(
                f"Could not query range {prefix}: unexpected status {response.status_code}")

        LOG.debug("Range %s returned status %s", prefix, response.status_code)
        return body

    def check_password(self, password: Union[str, bytes]) -> LookupResult:
        """
        Check if a password has been seen in a breach.

        Only the hash prefix is sent; the suffix comparison happens locally.

        Raises:
            TransportError: the API could not be reached
            ProtocolError: the API response was malformed
        """
        fingerprint = get_fingerprint(password)
        body = self.fetch_range(fingerprint.prefix)
        entries = parse_range_response(body)
        result = match_fingerprint(fingerprint, entries)

        LOG.debug("Range %s: %d candidates, found=%s",
                  fingerprint.prefix, len(entries), result.found)
        return result

    def check_password_async(self, password: Union[str, bytes],
                             on_complete: Callable[[Optional[LookupResult], Optional[BaseException]], None]
                             ) -> threading.Thread:
        """
        Run check_password on a new thread and report through on_complete.

        on_complete is called exactly once, on the worker thread, with either
        (result, None) or (None, error). There is no way to cancel the check.
        """
        def run():
            try:
                result = self.check_password(password)
            except Exception as e:
                on_complete(None, e)
                return
            on_complete(result, None)

        thread = threading.Thread(target=run, daemon=True)
        thread.start()
        return thread


def check_password(password: Union[str, bytes]) -> LookupResult:
    """Check a password with a default BreachChecker"""
    return BreachChecker().check_password(password)


def check_password_async(password: Union[str, bytes],
                         on_complete: Callable[[Optional[LookupResult], Optional[BaseException]], None]
                         ) -> threading.Thread:
    """Asynchronous variant of check_password; see BreachChecker.check_password_async"""
    return BreachChecker().check_password_async(password, on_complete)
