"""Exception hierarchy for failures outside the request pipeline.

Requests themselves never raise: HTTP outcomes and transport failures are
returned as result variants (see :mod:`typed_http.results`). The exceptions
here cover the surrounding setup, such as reading settings from the
environment or parsing command line input.

Exception Hierarchy:
    TypedHTTPError: Base exception for all typed-http errors
    └── ConfigurationError: Settings could not be read or parsed

Example:
    >>> try:
    ...     settings = ClientSettings.from_env()
    ... except ConfigurationError as e:
    ...     print(f"Bad setting {e.key}: {e}")
"""

from __future__ import annotations


class TypedHTTPError(Exception):
    """Base exception for all typed-http errors."""

    pass


class ConfigurationError(TypedHTTPError):
    """Raised when a setting is missing or malformed.

    Attributes:
        key: Name of the offending setting, when known
    """

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key
