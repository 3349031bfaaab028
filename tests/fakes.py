from typing import List, Optional

import requests


def fake_response(text: str = "", status_code: int = 200) -> requests.Response:
    """A real requests.Response, so raise_for_status behaves like the library's"""
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode("ascii")
    response.encoding = "ascii"
    response.url = "https://api.pwnedpasswords.com/range/"
    return response


class FakeSession:
    """Records every GET and answers with a canned response or exception"""

    def __init__(self, text: str = "", status_code: int = 200,
                 error: Optional[Exception] = None):
        self._text = text
        self._status_code = status_code
        self._error = error
        self.calls: List[dict] = []

    def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self._error is not None:
            raise self._error
        return fake_response(self._text, self._status_code)
