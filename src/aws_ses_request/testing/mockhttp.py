#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0

from collections import deque
from typing import ClassVar

from .._http import Field, Fields, HTTPResponse
from ..interfaces.http import HTTPClient, HTTPRequest, HTTPRequestConfiguration


class MockHTTPClientError(Exception):
    """Exception raised by MockHTTPClient for test setup issues."""


class MockTransportError(Exception):
    """Stand-in for a connection failure raised by a real transport."""


class MockHTTPClient(HTTPClient):
    """Implementation of :py:class:`.interfaces.http.HTTPClient` solely for testing
    purposes.

    Responses and transport failures are queued in FIFO order and requests are
    captured for inspection.
    """

    TRANSPORT_EXCEPTIONS: ClassVar[tuple[type[BaseException], ...]] = (
        MockTransportError,
        TimeoutError,
    )

    def __init__(self) -> None:
        self._response_queue: deque[HTTPResponse | BaseException] = deque()
        self._captured_requests: list[HTTPRequest] = []
        self._captured_configs: list[HTTPRequestConfiguration | None] = []

    def add_response(
        self,
        status: int = 200,
        headers: list[tuple[str, str]] | None = None,
        body: bytes = b"",
    ) -> None:
        """Queue a response for the next request.

        :param status: HTTP status code.
        :param headers: HTTP response headers as list of (name, value) tuples.
        :param body: Response body as bytes.
        """
        fields = Fields()
        for name, value in headers or []:
            if name in fields:
                fields[name].add(value)
            else:
                fields.set_field(Field(name=name, values=[value]))
        self._response_queue.append(
            HTTPResponse(status=status, fields=fields, body=body)
        )

    def add_error(self, error: BaseException) -> None:
        """Queue an exception to be raised by the next request."""
        self._response_queue.append(error)

    async def send(
        self,
        request: HTTPRequest,
        *,
        request_config: HTTPRequestConfiguration | None = None,
    ) -> HTTPResponse:
        """Return or raise the next queued outcome.

        :param request: The request including destination URI, fields, payload.
        :param request_config: Configuration specific to this request.
        :raises MockHTTPClientError: If nothing is queued.
        """
        self._captured_requests.append(request)
        self._captured_configs.append(request_config)

        if not self._response_queue:
            raise MockHTTPClientError(
                "No responses queued. Use add_response() to queue responses."
            )
        outcome = self._response_queue.popleft()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def is_timeout_error(self, error: BaseException) -> bool:
        return isinstance(error, TimeoutError)

    @property
    def call_count(self) -> int:
        """The number of requests made to this client."""
        return len(self._captured_requests)

    @property
    def captured_requests(self) -> list[HTTPRequest]:
        """The list of all requests captured by this client."""
        return self._captured_requests.copy()

    @property
    def captured_configs(self) -> list[HTTPRequestConfiguration | None]:
        """The request configuration passed with each captured request."""
        return self._captured_configs.copy()

    def reset(self) -> None:
        """Reset queued outcomes and captured requests."""
        self._response_queue.clear()
        self._captured_requests.clear()
        self._captured_configs.clear()
