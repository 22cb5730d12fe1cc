# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Protocol, runtime_checkable


class Field(Protocol):
    """A name-value pair representing a single HTTP header.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names may be normalized but should be preserved for accuracy during
    transmission.
    """

    name: str
    values: list[str]

    def add(self, value: str) -> None:
        """Append a value to a field."""
        ...

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        ...

    def as_string(self, delimiter: str = ", ") -> str:
        """Serialize the ``Field``'s values into a single line string."""
        ...

    def as_tuples(self) -> list[tuple[str, str]]:
        """Get list of ``name``, ``value`` tuples where each tuple represents one
        value."""
        ...


class Fields(Protocol):
    """Case-insensitive collection of request or response headers."""

    def set_field(self, field: Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        ...

    def __getitem__(self, name: str) -> Field:
        """Retrieve Field entry."""
        ...

    def __contains__(self, name: str) -> bool: ...

    def __iter__(self) -> Iterator[Field]:
        """Allow iteration over entries."""
        ...

    def __len__(self) -> int:
        """Get total number of Field entries."""
        ...


@runtime_checkable
class URI(Protocol):
    """Target location of an SES request."""

    scheme: str
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``email.us-east-1.amazonaws.com``."""

    port: int | None
    """An explicit port number."""

    path: str | None
    """Path component of the URI."""

    query: str | None
    """Already percent-encoded query component of the URI."""

    def build(self) -> str:
        """Construct URI string representation.

        Returns a string of the form ``{scheme}://{host}:{port}{path}?{query}``
        """
        ...

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``"""
        ...


class HTTPRequest(Protocol):
    """A signed request ready to be put on the wire."""

    method: str
    destination: URI
    fields: Fields
    body: bytes | None


class HTTPResponse(Protocol):
    """The raw result of a completed HTTP exchange."""

    status: int
    fields: Fields
    body: bytes
    reason: str | None


@dataclass(kw_only=True, frozen=True)
class HTTPRequestConfiguration:
    """Request-level HTTP configuration.

    :param timeout: How long, in seconds, the whole exchange may take before it is
        abandoned. ``None`` falls back to the client configuration.
    """

    timeout: float | None = None


@runtime_checkable
class HTTPClient(Protocol):
    """An asynchronous HTTP client used to send signed SES requests."""

    TRANSPORT_EXCEPTIONS: ClassVar[tuple[type[BaseException], ...]]
    """Exceptions that indicate the exchange never produced an HTTP response."""

    async def send(
        self,
        request: HTTPRequest,
        *,
        request_config: HTTPRequestConfiguration | None = None,
    ) -> HTTPResponse:
        """Send HTTP request over the wire and return the response.

        :param request: The request including destination URI, fields, payload.
        :param request_config: Configuration specific to this request.
        """
        ...

    def is_timeout_error(self, error: BaseException) -> bool:
        """Whether a transport exception was caused by a timeout."""
        ...
