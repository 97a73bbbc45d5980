"""Result variants returned by every request.

A call never raises for an HTTP outcome. Instead it returns exactly one of
eight variants, discriminated by the ``code``/``name`` pair:

    Ok            200  "ok"            data
    Created       201  "created"       data
    BadRequest    400  "bad request"
    Unauthorized  401  "unauthorized"
    NotFound      404  "not found"
    ServerError   500  "server error"
    Unknown       0    "unknown"       status_code
    ClientError   -1   "client error"  err

``Unknown.code`` is 0 rather than the real status so that callers can branch on
``code`` alone; the real status lives in ``status_code``. ``ClientError`` is not
an HTTP 4xx: it means the transport raised or a declared-JSON body could not be
parsed, and ``err`` is the exception exactly as it was caught.

Example:
    >>> result = await client.get(path="/users")
    >>> match result:
    ...     case Ok(data=users):
    ...         print(users)
    ...     case Unknown(status_code=status):
    ...         print(f"unexpected status {status}")
    ...     case ClientError(err=err):
    ...         raise err
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Literal, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """200 response with its decoded payload."""

    data: T
    code: ClassVar[Literal[200]] = 200
    name: ClassVar[Literal["ok"]] = "ok"
    is_success: ClassVar[bool] = True


@dataclass(frozen=True)
class Created(Generic[T]):
    """201 response with its decoded payload."""

    data: T
    code: ClassVar[Literal[201]] = 201
    name: ClassVar[Literal["created"]] = "created"
    is_success: ClassVar[bool] = True


@dataclass(frozen=True)
class BadRequest:
    code: ClassVar[Literal[400]] = 400
    name: ClassVar[Literal["bad request"]] = "bad request"
    is_success: ClassVar[bool] = False


@dataclass(frozen=True)
class Unauthorized:
    code: ClassVar[Literal[401]] = 401
    name: ClassVar[Literal["unauthorized"]] = "unauthorized"
    is_success: ClassVar[bool] = False


@dataclass(frozen=True)
class NotFound:
    code: ClassVar[Literal[404]] = 404
    name: ClassVar[Literal["not found"]] = "not found"
    is_success: ClassVar[bool] = False


@dataclass(frozen=True)
class ServerError:
    code: ClassVar[Literal[500]] = 500
    name: ClassVar[Literal["server error"]] = "server error"
    is_success: ClassVar[bool] = False


@dataclass(frozen=True)
class Unknown:
    """Any status outside 200, 201, 400, 401, 404 and 500.

    Attributes:
        status_code: The status code the server actually returned
    """

    status_code: int
    code: ClassVar[Literal[0]] = 0
    name: ClassVar[Literal["unknown"]] = "unknown"
    is_success: ClassVar[bool] = False


@dataclass(frozen=True)
class ClientError:
    """The request could not be completed or its JSON body could not be read.

    Attributes:
        err: The exception raised by the transport or the JSON decoder, unmodified
    """

    err: BaseException
    code: ClassVar[Literal[-1]] = -1
    name: ClassVar[Literal["client error"]] = "client error"
    is_success: ClassVar[bool] = False


Result = Union[
    Ok[T],
    Created[T],
    BadRequest,
    Unauthorized,
    NotFound,
    ServerError,
    Unknown,
    ClientError,
]
"""Everything a single call can produce."""


def classify_status(status: int, data: Any) -> Result[Any]:
    """Map an HTTP status code to its result variant.

    ``data`` is attached only to the 200 and 201 variants and dropped otherwise.
    """
    if status == 200:
        return Ok(data)
    if status == 201:
        return Created(data)
    if status == 400:
        return BadRequest()
    if status == 401:
        return Unauthorized()
    if status == 404:
        return NotFound()
    if status == 500:
        return ServerError()
    return Unknown(status_code=status)
