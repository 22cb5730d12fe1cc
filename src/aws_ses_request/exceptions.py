# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Literal


class BaseSESException(Exception):
    """Top-level exception to capture errors raised by aws-ses-request."""


class MissingExpectedParameterException(BaseSESException, ValueError):
    """A request lacks something it needs before it can be signed."""


class UnsupportedMethodException(BaseSESException, ValueError):
    """The HTTP method is not one the SES Query API accepts."""


class ErrorKind(Enum):
    """Which stage of the exchange an :py:class:`SESError` came from."""

    TRANSPORT = "transport"
    """No HTTP response was received."""

    SERVICE = "service"
    """SES answered with a structured error document."""

    MALFORMED_RESPONSE = "malformed_response"
    """SES answered, but the body was not the expected XML structure."""


type Fault = Literal["client", "server"] | None
"""Whether the client or server is at fault.

If None, then there was not enough information to determine fault.
"""


@dataclass(kw_only=True)
class SESError(BaseSESException):
    """Base type of every failed outcome returned by the request pipeline.

    Outcomes are returned rather than raised; use
    :py:func:`aws_ses_request.responses.raise_for_error` to turn one into an
    exception.
    """

    kind: ClassVar[ErrorKind]

    message: str = field(default="", kw_only=False)
    """The message of the error."""

    is_retry_safe: ClassVar[bool | None] = None
    """Whether the caller may safely resend the request.

    A value of None indicates that there is not enough information available to
    determine if a retry is safe.
    """

    def __post_init__(self):
        super().__init__(self.message)


@dataclass(kw_only=True)
class TransportError(SESError):
    """The connection, TLS handshake, name resolution or read failed."""

    kind: ClassVar[ErrorKind] = ErrorKind.TRANSPORT
    is_retry_safe: ClassVar[bool | None] = True

    code: str
    """Name of the underlying failure, for example ``ClientConnectorError``."""

    is_timeout_error: bool = False
    """Whether the failure was a timeout."""


@dataclass(kw_only=True)
class ServiceError(SESError):
    """SES rejected the request with an ``Error`` document."""

    kind: ClassVar[ErrorKind] = ErrorKind.SERVICE
    is_retry_safe: ClassVar[bool | None] = False

    status_code: int
    type: str
    """``Sender`` or ``Receiver``."""

    code: str
    """The SES error code, for example ``InvalidParameterValue``."""

    request_id: str
    """The request identifier SES assigned to the failed call."""

    @property
    def fault(self) -> Fault:
        match self.type:
            case "Sender":
                return "client"
            case "Receiver":
                return "server"
            case _:
                return None


@dataclass(kw_only=True)
class MalformedResponseError(SESError):
    """A response arrived but its body could not be read as an SES document."""

    kind: ClassVar[ErrorKind] = ErrorKind.MALFORMED_RESPONSE

    status_code: int
    body: bytes = field(default=b"", repr=False)
    """The raw payload, kept for diagnosis."""
