# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Concrete HTTP primitives shared by the signer, the dispatcher and the
transport implementations."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from urllib.parse import urlunparse

import aws_ses_request.interfaces.http as interfaces_http


class Field(interfaces_http.Field):
    """A name-value pair representing a single HTTP header.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names are preserved as given for transmission.
    """

    def __init__(self, *, name: str, values: Iterable[str] | None = None):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        self.values = values

    def as_string(self, delimiter: str = ", ") -> str:
        """Get delimited string of all values.

        If the ``Field`` has zero values, the empty string is returned. If the ``Field``
        has exactly one value, the value is returned unmodified.
        """
        if len(self.values) == 1:
            return self.values[0]
        return delimiter.join(self.values)

    def as_tuples(self) -> list[tuple[str, str]]:
        """Get list of ``name``, ``value`` tuples where each tuple represents one
        value."""
        return [(self.name, val) for val in self.values]

    def __eq__(self, other: object) -> bool:
        """Name and values must match.

        Values order must match.
        """
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, values={self.values!r})"


class Fields(interfaces_http.Fields):
    def __init__(self, initial: Iterable[Field] | None = None):
        """Collection of header entries mapped by lowercased name, kept in insertion
        order.

        :param initial: Initial list of ``Field`` objects. Later duplicates of a name
            replace earlier ones.
        """
        self.entries: OrderedDict[str, Field] = OrderedDict()
        for fld in initial or ():
            self.set_field(fld)

    def set_field(self, field: Field) -> None:
        """Set or override the entry for ``field.name``."""
        self.entries[field.name.lower()] = field

    def get(self, key: str, default: Field | None = None) -> Field | None:
        return self[key] if key in self else default

    def __getitem__(self, name: str) -> Field:
        return self.entries[name.lower()]

    def __delitem__(self, name: str) -> None:
        del self.entries[name.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self.entries

    def __iter__(self) -> Iterator[Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return False
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"Fields({list(self.entries.values())})"

    def as_tuples(self) -> list[tuple[str, str]]:
        """Flatten every header into ``name``, ``value`` tuples."""
        return [pair for fld in self for pair in fld.as_tuples()]


@dataclass(kw_only=True, frozen=True)
class URI(interfaces_http.URI):
    """Target location of an SES request."""

    scheme: str = "https"
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``email.us-east-1.amazonaws.com``."""

    port: int | None = None
    """An explicit port number."""

    path: str | None = None
    """Path component of the URI."""

    query: str | None = None
    """Already percent-encoded query component of the URI."""

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``

        ``port`` is only included if set.
        """
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"

    def build(self) -> str:
        """Construct URI string representation.

        The query is expected to be encoded already and is emitted as-is.
        """
        components = (
            self.scheme,
            self.netloc,
            self.path or "",
            "",  # params
            self.query or "",
            "",  # fragment
        )
        return urlunparse(components)


class HTTPRequest(interfaces_http.HTTPRequest):
    def __init__(
        self,
        *,
        method: str,
        destination: URI,
        fields: Fields,
        body: bytes | None = None,
    ):
        self.method = method
        self.destination = destination
        self.fields = fields
        self.body = body

    def __repr__(self) -> str:
        return (
            f"HTTPRequest(method={self.method!r}, "
            f"destination={self.destination.build()!r}, fields={self.fields!r})"
        )


@dataclass(kw_only=True)
class HTTPResponse(interfaces_http.HTTPResponse):
    status: int
    """The HTTP status code of the response."""

    fields: Fields
    """Response headers."""

    body: bytes = b""
    """The fully read response payload."""

    reason: str | None = None
    """Optional string provided by the server explaining the status."""
