"""Exceptions raised by the CCMS core library.

HTTP failures are not wrapped: they surface as ``httpx.HTTPStatusError`` and
``httpx.TransportError`` exactly as ``raise_for_status()`` and the transport
raise them. Use ``is_unauthorized_error()`` to classify them.
"""

import json
from typing import Dict, List

import httpx
from pydantic import ValidationError


class CCMSError(Exception):
    """Base class for library errors."""


class DuplicateSubmissionError(CCMSError):
    """A form submission was attempted while another one is still in flight."""


class UnsupportedLanguageError(CCMSError, ValueError):
    """Language code has no translation table."""


class FormValidationError(CCMSError):
    """Form input violated one or more schema constraints.

    Attributes:
        errors: Field name -> every message violated for that field
    """

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid form input: {fields}")


# A failed backend round trip: the request itself, or a reply that does not
# parse into the expected shape
REQUEST_ERRORS = (httpx.HTTPError, ValidationError, json.JSONDecodeError)


def is_unauthorized_error(error: BaseException) -> bool:
    """Check whether an error is a 401/403 response from the backend."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in (401, 403)
    return False
